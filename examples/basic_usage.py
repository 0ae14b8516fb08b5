"""Basic RAGLite client example.

Walks through the everyday workflow: health check, model and dataset
creation, document upload, search, question answering and statistics.
Needs a running RAGLite service.

Usage:
    RAGLITE_BASE_URL=http://localhost:8080 python examples/basic_usage.py
"""

import os

from src.raglite import (
    AIModelConfig,
    CreateDatasetRequest,
    CreateModelRequest,
    DatasetConfig,
    ListModelsRequest,
    QARequest,
    RAGLiteClient,
    RetrieveRequest,
    UploadDocumentRequest,
)

GUIDE = """# RAGLite Guide

## Introduction

RAGLite is a lightweight Retrieval-Augmented Generation system.

## Features

- Document management
- Vector retrieval
- Question answering
"""


def truncate(text: str, limit: int) -> str:
    return text if len(text) <= limit else text[:limit] + "..."


def main() -> None:
    # 1. Connect using RAGLITE_* environment variables
    with RAGLiteClient.from_settings() as client:
        print("=== Health ===")
        health = client.health.check()
        if health.is_err():
            print(f"Health check failed: {health.error}")
            return
        print(f"Service: {health.unwrap().service}, Status: {health.unwrap().status}\n")

        # 2. Register a chat model and an embedding model
        print("=== Models ===")
        chat = client.models.create(
            CreateModelRequest(
                name="OpenAI GPT-4",
                model_type="chat",
                provider="openai",
                model_name="gpt-4",
                config=AIModelConfig(api_key=os.getenv("OPENAI_API_KEY"), temperature=0.7),
                is_default=True,
            )
        )
        if chat.is_ok():
            print(f"Model created: {chat.unwrap().name} (ID: {chat.unwrap().id})")
        else:
            print(f"Failed to create model: {chat.error}")

        embedding = client.models.create(
            CreateModelRequest(
                name="Embedding Small",
                model_type="embedding",
                provider="openai",
                model_name="text-embedding-3-small",
                config=AIModelConfig(api_key=os.getenv("OPENAI_API_KEY")),
            )
        )

        models = client.models.list(ListModelsRequest(model_type="chat"))
        if models.is_ok():
            print(f"Found {models.unwrap().total} chat models")
            for m in models.unwrap().models:
                print(f"  - {m.name} ({m.provider}/{m.model_name}) [{m.status}]")
        print()

        # 3. Create a dataset bound to the embedding model
        print("=== Dataset ===")
        created = client.datasets.create(
            CreateDatasetRequest(
                name="Engineering docs",
                description="Internal engineering knowledge base",
                dense_model_id=embedding.unwrap().id if embedding.is_ok() else None,
                config=DatasetConfig(chunk_size=512, chunk_overlap=50),
            )
        )
        if created.is_err():
            print(f"Failed to create dataset: {created.error}")
            return
        dataset = created.unwrap()
        print(f"Dataset created: {dataset.name} (ID: {dataset.id})\n")

        # 4. Upload a document with tags and metadata
        print("=== Upload ===")
        uploaded = client.documents.upload(
            UploadDocumentRequest(
                dataset_id=dataset.id,
                filename="guide.md",
                file=GUIDE,
                tags=["docs", "guide"],
                metadata={"author": "RAGLite Team", "version": "1.0"},
            )
        )
        if uploaded.is_ok():
            print(f"Uploaded: {uploaded.unwrap().filename} (Status: {uploaded.unwrap().status})\n")
        else:
            print(f"Failed to upload document: {uploaded.error}\n")

        # 5. Search
        print("=== Search ===")
        search = client.search.retrieve(
            RetrieveRequest(query="What features does RAGLite have?", dataset_id=dataset.id, top_k=5)
        )
        if search.is_ok():
            response = search.unwrap()
            print(f"Found {response.total} results (in {response.latency_ms}ms)")
            for i, hit in enumerate(response.results, start=1):
                print(f"  {i}. {hit.document_title} (Score: {hit.score:.3f})")
                print(f"     {truncate(hit.content, 100)}")
        else:
            print(f"Search failed: {search.error}")
        print()

        # 6. Ask a question
        print("=== Question answering ===")
        qa = client.qa.ask(
            QARequest(query="What is RAGLite for?", dataset_id=dataset.id, top_k=3)
        )
        if qa.is_ok():
            print(f"Answer: {qa.unwrap().answer}")
            print(f"Used {len(qa.unwrap().context)} context chunks\n")
        else:
            print(f"Question failed: {qa.error}\n")

        # 7. Dataset statistics
        print("=== Statistics ===")
        stats = client.datasets.get_stats(dataset.id)
        if stats.is_ok():
            s = stats.unwrap()
            print(f"Documents: {s.total_documents}")
            print(f"  - pending: {s.pending_docs}")
            print(f"  - processing: {s.processing_docs}")
            print(f"  - completed: {s.completed_docs}")
            print(f"  - failed: {s.failed_docs}")
            print(f"Total size: {s.total_file_size} bytes")


if __name__ == "__main__":
    main()
