"""Advanced RAGLite client example.

Shows upserts, configuration checks, multi-model datasets, filtered search,
concurrent uploads, per-call deadlines, error classification and partial
updates.

Usage:
    python examples/advanced_usage.py
"""

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from src.raglite import (
    AIModel,
    AIModelConfig,
    APIError,
    CheckModelRequest,
    CreateDatasetRequest,
    DatasetConfig,
    ModelCapabilities,
    RAGLiteClient,
    RequestContext,
    RetrieveRequest,
    UpdateDatasetRequest,
    UploadDocumentRequest,
    UpsertModelRequest,
    with_api_key,
    with_timeout,
)

PROVIDERS = {
    "dense": ("openai", "https://api.openai.com/v1"),
    "sparse": ("local", "http://localhost:9200"),
    "reranker": ("local", "http://localhost:8001"),
}


def upsert_model(client: RAGLiteClient, model_type: str, model_name: str) -> Optional[AIModel]:
    """Create the model, or update it if the server already has it."""
    provider, api_base = PROVIDERS[model_type]
    result = client.models.upsert(
        UpsertModelRequest(
            name=f"{model_type}-{model_name}",
            model_type=model_type,
            provider=provider,
            model_name=model_name,
            config=AIModelConfig(api_key=os.getenv("OPENAI_API_KEY"), api_base=api_base),
        )
    )
    if result.is_err():
        print(f"Failed to upsert {model_type} model: {result.error}")
        return None
    return result.unwrap().model


def main() -> None:
    logging.basicConfig(level=logging.DEBUG, format="%(name)s %(message)s")

    client = RAGLiteClient(
        os.getenv("RAGLITE_BASE_URL", "http://localhost:5050"),
        with_timeout(60),
        with_api_key(os.getenv("RAGLITE_API_KEY")),
    )

    # 1. Upsert a chat model
    print("=== Upsert ===")
    upserted = client.models.upsert(
        UpsertModelRequest(
            name="GPT-4",
            model_type="chat",
            provider="openai",
            model_name="gpt-4",
            config=AIModelConfig(
                api_key=os.getenv("OPENAI_API_KEY"), api_base="https://api.openai.com/v1"
            ),
            capabilities=ModelCapabilities(context_window=8192),
        )
    )
    if upserted.is_ok():
        u = upserted.unwrap()
        print(f"Model {u.action}: {u.model.name} (ID: {u.model.id})\n")
    else:
        print(f"Failed to upsert model: {upserted.error}\n")

    # 2. Check a provider configuration before saving it
    print("=== Check ===")
    checked = client.models.check(
        CheckModelRequest(
            provider="openai",
            model_name="gpt-4",
            config=AIModelConfig(api_key=os.getenv("OPENAI_API_KEY")),
        )
    )
    if checked.is_ok():
        if checked.unwrap().valid:
            print("Model configuration is valid\n")
        else:
            print(f"Model configuration is invalid: {checked.unwrap().error}\n")

    # 3. Dataset with dense, sparse and reranker models
    print("=== Multi-model dataset ===")
    dense = upsert_model(client, "dense", "text-embedding-3-small")
    if dense is None:
        return
    sparse = upsert_model(client, "sparse", "bm25")
    reranker = upsert_model(client, "reranker", "bge-reranker-v2-m3")

    created = client.datasets.create(
        CreateDatasetRequest(
            name="Research",
            description="Hybrid retrieval with reranking",
            dense_model_id=dense.id,
            sparse_model_id=sparse.id if sparse else None,
            reranker_model_id=reranker.id if reranker else None,
            config=DatasetConfig(chunk_size=512, chunk_overlap=100),
        )
    )
    if created.is_err():
        print(f"Failed to create dataset: {created.error}")
        return
    dataset = created.unwrap()
    print(f"Dataset created: {dataset.name} (ID: {dataset.id})\n")

    # 4. Concurrent uploads share one client
    print("=== Concurrent uploads ===")
    documents = {
        "doc1.md": "# Document 1\nThe first document",
        "doc2.md": "# Document 2\nThe second document",
        "doc3.md": "# Document 3\nThe third document",
    }

    def upload(item: tuple[str, str]) -> str:
        filename, content = item
        result = client.documents.upload(
            UploadDocumentRequest(
                dataset_id=dataset.id, filename=filename, file=content, tags=["research", "AI"]
            )
        )
        return f"Uploaded: {filename}" if result.is_ok() else f"Failed {filename}: {result.error}"

    with ThreadPoolExecutor(max_workers=3) as pool:
        for line in pool.map(upload, documents.items()):
            print(line)
    print()

    # 5. Filtered search under a five second deadline
    print("=== Filtered search ===")
    search = client.search.retrieve(
        RetrieveRequest(
            query="artificial intelligence",
            dataset_id=dataset.id,
            top_k=10,
            retrieval_mode="smart",
            similarity_threshold=0.7,
            tags=["research", "AI"],
            metadata={"category": "research"},
        ),
        ctx=RequestContext.with_timeout(5.0),
    )
    if search.is_ok():
        print(f"Found {len(search.unwrap().results)} results")
        for i, hit in enumerate(search.unwrap().results, start=1):
            print(f"{i}. [Score: {hit.score:.3f}] {hit.document_title}")
    else:
        print(f"Search failed: {search.error}")
    print()

    # 6. Error classification
    print("=== Errors ===")
    missing = client.datasets.get("non-existent-id")
    if missing.is_err():
        err = missing.error
        if isinstance(err, APIError) and err.is_not_found():
            print("Dataset not found (404)")
        elif isinstance(err, APIError) and err.is_bad_request():
            print("Bad request (400)")
        elif isinstance(err, APIError) and err.is_server_error():
            print("Server error (5xx)")
        else:
            print(f"Other error: {err}")
    print()

    # 7. Partial update: only status and config are sent
    print("=== Partial update ===")
    updated = client.datasets.update(
        dataset.id,
        UpdateDatasetRequest(status="active", config=DatasetConfig(chunk_size=1024, chunk_overlap=100)),
    )
    if updated.is_ok():
        print(f"Dataset updated: {updated.unwrap().name}")
    else:
        print(f"Failed to update dataset: {updated.error}")

    client.close()


if __name__ == "__main__":
    main()
