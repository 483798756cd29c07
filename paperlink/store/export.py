"""JSONL snapshots of papers and the knowledge graph."""

from pathlib import Path
from typing import Iterable

from ..schemas.graph import GraphExport
from ..schemas.paper import SourcePaper


def save_papers(papers: Iterable[SourcePaper], output_path: Path) -> int:
    """Write one paper per line. Returns the number written."""
    import jsonlines

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    count = 0
    with jsonlines.open(output_path, mode="w") as writer:
        for paper in papers:
            writer.write(paper.model_dump(mode="json"))
            count += 1
    return count


def load_papers(input_path: Path) -> list[SourcePaper]:
    import jsonlines

    with jsonlines.open(input_path) as reader:
        return [SourcePaper.model_validate(obj) for obj in reader]


def save_graph(export: GraphExport, output_path: Path) -> None:
    """
    Write nodes then connections, one record per line.

    Each line carries a "record" key of "node" or "connection".
    """
    import jsonlines

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with jsonlines.open(output_path, mode="w") as writer:
        for node in export.nodes:
            writer.write({"record": "node", **node.model_dump(mode="json")})
        for connection in export.connections:
            writer.write({
                "record": "connection",
                "id": connection.connection_id,
                **connection.model_dump(mode="json"),
            })
