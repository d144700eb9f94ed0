"""
Citation resolution endpoint.

Routes:
- POST /citations/resolve - Map the citation tokens of an answer to source chunks

Dependencies: devmind.core.citation_builder
System role: Citation lookup HTTP API
"""

from fastapi import APIRouter, Depends

from devmind.api.deps import get_citation_resolver
from devmind.api.routers.error_handling import handle_api_errors
from devmind.core.citation_builder import CITATION_GRAMMAR_VERSION, CitationResolver
from devmind.models.citation import CitationResolveRequest, CitationResolveResponse

router = APIRouter(prefix="/citations", tags=["citations"])


@router.post("/resolve", response_model=CitationResolveResponse)
@handle_api_errors
async def resolve_citations(
    request: CitationResolveRequest,
    resolver: CitationResolver = Depends(get_citation_resolver),
) -> CitationResolveResponse:
    """
    Resolve every citation token of an answer.

    Unresolvable tokens come back as placeholders with found=false.
    """
    return CitationResolveResponse(
        citations=resolver.resolve_all(request.answer, request.sources),
        grammar_version=CITATION_GRAMMAR_VERSION,
    )
