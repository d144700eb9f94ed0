"""
Workspace insight service.

Produces the three-act overview and the mind map of a workspace from a
fixed retrieval query. Completion output is parsed defensively; malformed
output degrades to fixed fallbacks instead of failing the request.

Dependencies: devmind.core.retriever, devmind.core.json_extraction, devmind.core.prompts
System role: Overview and mind map orchestration layer
"""

import logging

from devmind.core.exceptions import ValidationError
from devmind.core.json_extraction import parse_model_output
from devmind.core.prompts import (
    MINDMAP_EXCERPT_CHARS,
    MINDMAP_PROMPT,
    MINDMAP_QUERY,
    OVERVIEW_PROMPT,
    OVERVIEW_QUERY,
)
from devmind.core.retriever import Retriever
from devmind.models.chunk import ChunkMetadata
from devmind.models.insights import (
    MindMapBranch,
    MindMapEdge,
    MindMapNode,
    MindMapResponse,
    MindMapStructure,
    Narrative,
    WorkspaceOverview,
)

logger = logging.getLogger(__name__)

EMPTY_OVERVIEW = WorkspaceOverview(
    narrative=Narrative(
        act1="No content found in this workspace.",
        act2="Add some sources (PDFs or GitHub repos) to get started.",
        act3="Once you add sources, I'll analyze them and provide insights.",
    ),
    suggested_questions=[],
)

FALLBACK_QUESTIONS = [
    "What are the main topics covered?",
    "What are the key concepts?",
    "How do the different sources connect?",
    "What practical insights can be drawn?",
]

FALLBACK_MINDMAP = MindMapStructure(
    central="Workspace",
    branches=[MindMapBranch(name="Sources", children=["PDF Documents", "GitHub Repos"])],
)

EMPTY_MINDMAP_LABEL = "No sources yet"


def overview_fallback(raw_text: str) -> WorkspaceOverview:
    """Overview built from unstructured model output."""
    return WorkspaceOverview(
        narrative=Narrative(
            act1=raw_text[:200] + "...",
            act2="Analysis generated but couldn't be structured properly.",
            act3="Try asking specific questions in the chat.",
        ),
        suggested_questions=list(FALLBACK_QUESTIONS),
    )


def build_mindmap_graph(structure: MindMapStructure) -> MindMapResponse:
    """
    Convert a mind map structure into nodes and parent-to-child edges.

    Node ids are 'central', 'branch-<i>' and 'child-<i>-<j>'.
    """
    nodes = [MindMapNode(id="central", type="central", label=structure.central)]
    edges: list[MindMapEdge] = []

    for i, branch in enumerate(structure.branches):
        branch_id = f"branch-{i}"
        nodes.append(MindMapNode(id=branch_id, type="branch", label=branch.name))
        edges.append(MindMapEdge(id=f"e-central-{branch_id}", source="central", target=branch_id))

        for j, child in enumerate(branch.children):
            child_id = f"child-{i}-{j}"
            nodes.append(MindMapNode(id=child_id, type="leaf", label=child))
            edges.append(MindMapEdge(id=f"e-{branch_id}-{child_id}", source=branch_id, target=child_id))

    return MindMapResponse(nodes=nodes, edges=edges)


def _overview_context(sources: list[ChunkMetadata]) -> str:
    return "\n\n".join(
        f"--- [{source.source_type.value}] {source.source} (Page {source.page}) ---\n{source.text}"
        for source in sources
    )


def _mindmap_context(sources: list[ChunkMetadata]) -> str:
    return "\n\n".join(
        f"[{source.source_type.value}] {source.file_path or source.source}: "
        f"{source.text[:MINDMAP_EXCERPT_CHARS]}"
        for source in sources
    )


class InsightService:
    """Overview and mind map synthesis for one workspace."""

    def __init__(
        self,
        retriever: Retriever,
        completion_client,
        overview_top_k: int,
        mindmap_top_k: int,
    ) -> None:
        """
        Initialize insight service.

        Args:
            retriever: Workspace retriever
            completion_client: Client exposing async complete(prompt, **variables)
            overview_top_k: Chunks sampled for the overview
            mindmap_top_k: Chunks sampled for the mind map
        """
        self.retriever = retriever
        self.completion_client = completion_client
        self.overview_top_k = overview_top_k
        self.mindmap_top_k = mindmap_top_k

    async def overview(self, workspace_id: str | None) -> WorkspaceOverview:
        """
        Three-act overview with suggested questions.

        Raises:
            ValidationError: Missing workspace id
            UpstreamRateLimited: Embedding or completion throttled upstream
            UpstreamFailure: Any other upstream failure
        """
        _require_workspace(workspace_id)
        retrieval = await self.retriever.retrieve(workspace_id, OVERVIEW_QUERY, self.overview_top_k)
        if not retrieval.has_matches:
            return EMPTY_OVERVIEW.model_copy(deep=True)

        raw = await self.completion_client.complete(
            OVERVIEW_PROMPT, context=_overview_context(retrieval.sources)
        )
        overview = parse_model_output(raw, WorkspaceOverview, overview_fallback)
        logger.info(
            f"{__name__}:overview - Generated overview",
            extra={"workspace_id": workspace_id, "sources": len(retrieval.sources)},
        )
        return overview

    async def mindmap(self, workspace_id: str | None) -> MindMapResponse:
        """
        Mind map graph of the workspace's main themes.

        Raises:
            ValidationError: Missing workspace id
            UpstreamRateLimited: Embedding or completion throttled upstream
            UpstreamFailure: Any other upstream failure
        """
        _require_workspace(workspace_id)
        retrieval = await self.retriever.retrieve(workspace_id, MINDMAP_QUERY, self.mindmap_top_k)
        if not retrieval.has_matches:
            return MindMapResponse(
                nodes=[MindMapNode(id="central", type="central", label=EMPTY_MINDMAP_LABEL)],
                edges=[],
            )

        raw = await self.completion_client.complete(
            MINDMAP_PROMPT, context=_mindmap_context(retrieval.sources)
        )
        structure = parse_model_output(
            raw, MindMapStructure, lambda _: FALLBACK_MINDMAP.model_copy(deep=True)
        )
        logger.info(
            f"{__name__}:mindmap - Generated mind map with {len(structure.branches)} branches",
            extra={"workspace_id": workspace_id},
        )
        return build_mindmap_graph(structure)


def _require_workspace(workspace_id: str | None) -> None:
    if not workspace_id:
        raise ValidationError("Workspace ID is required", field="workspaceId")
