"""
Test suite for the citation resolution endpoint.

System role: Verification of citation lookup HTTP API
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from devmind.api.routers.citations import router
from devmind.core.citation_builder import CITATION_GRAMMAR_VERSION, NOT_FOUND_TEXT


@pytest.fixture
def client() -> TestClient:
    """Provide TestClient for an app with the citations router."""
    app = FastAPI()
    app.include_router(router)
    return TestClient(app)


class TestResolveCitationsEndpoint:
    """Test suite for POST /citations/resolve."""

    def test_resolve_should_return_chunk_for_each_token(self, client, code_metadata, pdf_metadata) -> None:
        """Should resolve tokens against the sources sent by the client."""
        response = client.post(
            "/citations/resolve",
            json={
                "answer": "See [Source: src/train.py, Page L101-L200] and [Source: notes.pdf, Page 7].",
                "sources": [
                    code_metadata.model_dump(by_alias=True, exclude_none=True, mode="json"),
                    pdf_metadata.model_dump(by_alias=True, exclude_none=True, mode="json"),
                ],
            },
        )

        assert response.status_code == 200
        first, second = response.json()["citations"]
        assert first["found"] is True
        assert first["chunk"]["lineStart"] == 101
        assert second == {
            "label": "notes.pdf",
            "page": "7",
            "found": False,
            "text": NOT_FOUND_TEXT,
            "chunk": None,
        }

    def test_resolve_should_return_empty_list_without_tokens(self, client) -> None:
        """Should return no citations for an answer without tokens."""
        response = client.post("/citations/resolve", json={"answer": "No sources here.", "sources": []})

        assert response.json() == {"citations": [], "grammarVersion": CITATION_GRAMMAR_VERSION}
