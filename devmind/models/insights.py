"""
Workspace insight models.

Strict schemas for the overview and mind map JSON produced by the
completion model, plus the graph returned to the UI.

Dependencies: pydantic
System role: Overview and mind map contracts
"""

from pydantic import Field

from devmind.models.common import CamelModel


class WorkspaceRequest(CamelModel):
    """Request carrying only the workspace id."""

    workspace_id: str | None = None


class Narrative(CamelModel):
    """Three-act synthesis of a workspace."""

    act1: str
    act2: str
    act3: str


class WorkspaceOverview(CamelModel):
    """Overview synthesis with follow-up question suggestions."""

    narrative: Narrative
    suggested_questions: list[str] = Field(default_factory=list)


class MindMapBranch(CamelModel):
    """Top-level theme with its sub-topics."""

    name: str
    children: list[str] = Field(default_factory=list)


class MindMapStructure(CamelModel):
    """Mind map as emitted by the completion model."""

    central: str = "Workspace"
    branches: list[MindMapBranch] = Field(default_factory=list)


class MindMapNode(CamelModel):
    """Graph node; `type` is central, branch or leaf."""

    id: str
    type: str
    label: str


class MindMapEdge(CamelModel):
    """Directed edge from parent to child node."""

    id: str
    source: str
    target: str


class MindMapResponse(CamelModel):
    """Mind map graph without layout geometry."""

    nodes: list[MindMapNode]
    edges: list[MindMapEdge]
