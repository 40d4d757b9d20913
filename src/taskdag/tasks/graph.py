"""Display-oriented dependency graph and project flattening."""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from taskdag.models.tasks import Project, Task, TaskStatus


@dataclass
class GraphNode:
    """A task as a drawable graph node."""

    id: str
    label: str
    status: TaskStatus
    project_name: str | None = None
    project_color: str | None = None


@dataclass
class GraphEdge:
    """A dependency edge, pointing from predecessor to dependent."""

    source: str
    target: str
    type: str = "dependency"


@dataclass
class DependencyGraph:
    """Nodes and edges for a dependency diagram."""

    nodes: list[GraphNode] = field(default_factory=list)
    edges: list[GraphEdge] = field(default_factory=list)


def build_dependency_graph(tasks: Sequence[Task]) -> DependencyGraph:
    """Turn a task set into nodes and predecessor -> dependent edges.

    One edge is emitted per declared dependency id, including ids that do
    not resolve; renderers decide what to do with dangling endpoints.
    """
    nodes = [
        GraphNode(
            id=task.id,
            label=task.name,
            status=task.status,
            project_name=task.project_name,
            project_color=task.project_color,
        )
        for task in tasks
    ]
    edges = [
        GraphEdge(source=dep_id, target=task.id)
        for task in tasks
        for dep_id in task.dependencies
    ]
    return DependencyGraph(nodes=nodes, edges=edges)


def flatten_projects(projects: Iterable[Project]) -> list[Task]:
    """Collect every project's tasks into one list.

    Each task is copied with ``project_id``, ``project_name`` and
    ``project_color`` filled from its project; the projects are untouched.
    """
    return [
        task.model_copy(
            update={
                "project_id": project.id,
                "project_name": project.name,
                "project_color": project.color,
            }
        )
        for project in projects
        for task in project.tasks
    ]
