"""
CLI for paperlink.

Commands:
    extract       - Recover text and sections from PDFs
    search        - Rank sections of PDFs against a query
    validate      - Check how well PDFs support a hypothesis
    generate      - Generate a grounded hypothesis (needs an LLM)
    ask           - Answer a question from PDF content (needs an LLM)
    export-graph  - Write the knowledge graph as JSONL
    serve         - Run the REST API
"""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich import print as rprint
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table as RichTable

app = typer.Typer(
    name="paperlink",
    help="Paperlink - PDF text recovery and hypothesis grounding",
)
console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show pipeline logs"),
):
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def _pdf_paths(paths: list[Path]) -> list[Path]:
    """Expand directories to the PDFs they contain."""
    pdfs: list[Path] = []
    for path in paths:
        if path.is_dir():
            pdfs.extend(sorted(path.glob("*.pdf")))
        elif path.exists():
            pdfs.append(path)
        else:
            rprint(f"[red]File not found: {path}[/red]")
            raise typer.Exit(1)
    if not pdfs:
        rprint("[red]No PDF files given[/red]")
        raise typer.Exit(1)
    return pdfs


def _load(paths: list[Path]):
    """Build an orchestrator and ingest every PDF into it."""
    from ..errors import EmptyDocumentError
    from ..rag.orchestrator import build_orchestrator

    orchestrator = build_orchestrator()
    for pdf_path in _pdf_paths(paths):
        try:
            orchestrator.ingest_pdf(
                pdf_path.read_bytes(),
                paper_id=pdf_path.stem,
                title=pdf_path.stem.replace("_", " "),
                url=pdf_path.resolve().as_uri(),
            )
        except EmptyDocumentError as e:
            rprint(f"[yellow]Skipped: {e}[/yellow]")
    return orchestrator


@app.command()
def extract(
    pdf_paths: list[Path] = typer.Argument(..., help="PDF files or directories"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write papers to this JSONL file"),
    show_sections: bool = typer.Option(False, "--show-sections/--hide-sections", help="Print section text"),
):
    """
    Recover text and sections from PDFs.

    Examples:
        paperlink extract paper.pdf --show-sections
        paperlink extract ./papers/ -o papers.jsonl
    """
    from ..store.export import save_papers

    orchestrator = _load(pdf_paths)
    papers = orchestrator.papers()

    table = RichTable(title="Extraction Results")
    table.add_column("Paper ID", style="cyan")
    table.add_column("Chars", justify="right")
    table.add_column("Sections", justify="right")
    table.add_column("Status")

    for paper in papers:
        style = "red" if paper.extraction_status.value == "degraded" else "green"
        table.add_row(
            paper.id,
            str(len(paper.extracted_text)),
            str(len(paper.relevant_sections)),
            f"[{style}]{paper.extraction_status.value}[/{style}]",
        )
    console.print(table)

    if show_sections:
        for paper in papers:
            rprint(f"\n[bold]{paper.title}[/bold]")
            for section in paper.relevant_sections:
                rprint(f"  - {section[:200]}")

    if output:
        count = save_papers(papers, output)
        rprint(f"\n[green]Wrote {count} papers to {output}[/green]")


@app.command()
def search(
    query: str = typer.Argument(..., help="Search query"),
    pdf_paths: list[Path] = typer.Argument(..., help="PDF files or directories"),
    top_n: int = typer.Option(10, "--top-n", "-k", help="Number of results"),
):
    """
    Rank sections of the given PDFs against a query.

    Example:
        paperlink search "BRCA1 mutation" ./papers/
    """
    orchestrator = _load(pdf_paths)
    response = orchestrator.search(query, top_n=top_n)

    if not response.results:
        rprint("[yellow]No results found[/yellow]")
        return

    table = RichTable(title=f"Search: {query}")
    table.add_column("#", justify="right")
    table.add_column("Paper", style="cyan")
    table.add_column("Score", justify="right")
    table.add_column("Section")

    for i, hit in enumerate(response.results, 1):
        table.add_row(str(i), hit.paper_id, f"{hit.relevance_score:.3f}", hit.section_text[:120])
    console.print(table)

    if not response.has_relevant_content:
        rprint("[yellow]Top result is below the relevance threshold[/yellow]")


@app.command()
def validate(
    hypothesis: str = typer.Argument(..., help="Hypothesis text"),
    pdf_paths: list[Path] = typer.Argument(..., help="Claimed source PDFs"),
):
    """Check how well the given PDFs support a hypothesis."""
    orchestrator = _load(pdf_paths)
    result = orchestrator.validate_hypothesis(hypothesis, [p.id for p in orchestrator.papers()])

    verdict = "[green]supported[/green]" if result.is_valid else "[red]not supported[/red]"
    rprint(f"\nHypothesis is {verdict} (confidence {result.confidence:.1f}%)")

    for evidence in result.supporting_evidence:
        rprint(f"  [cyan]{evidence.paper_id}[/cyan] ({evidence.relevance:.2f}): {evidence.evidence_text[:150]}")
    for warning in result.warnings:
        rprint(f"  [yellow]! {warning}[/yellow]")


@app.command()
def generate(
    query: str = typer.Argument(..., help="Research question"),
    pdf_paths: list[Path] = typer.Argument(..., help="Source PDFs"),
):
    """Generate a hypothesis grounded in the given PDFs."""
    orchestrator = _load(pdf_paths)
    result = orchestrator.generate_hypothesis(query)

    for warning in result.warnings:
        rprint(f"[yellow]! {warning}[/yellow]")

    if not result.success:
        rprint(f"[red]Generation failed: {result.error}[/red]")
        raise typer.Exit(1)

    hypothesis = result.hypothesis
    rprint(f"\n[bold]{hypothesis.title}[/bold] ({hypothesis.confidence:.1f}%)")
    rprint(hypothesis.description)
    rprint(f"\nSources: {', '.join(hypothesis.source_paper_ids)}")


@app.command()
def ask(
    question: str = typer.Argument(..., help="Question about the PDFs"),
    pdf_paths: list[Path] = typer.Argument(..., help="PDF files or directories"),
):
    """Answer a question strictly from PDF content."""
    orchestrator = _load(pdf_paths)
    answer = orchestrator.answer_question(question)

    if not answer.success:
        rprint(f"[red]{answer.error}[/red]")
        raise typer.Exit(1)
    rprint(answer.answer)


@app.command("export-graph")
def export_graph(
    pdf_paths: list[Path] = typer.Argument(..., help="PDF files or directories"),
    output: Path = typer.Option(Path("graph.jsonl"), "--output", "-o", help="Output JSONL file"),
    hypothesis: Optional[str] = typer.Option(None, "--hypothesis", help="Link this hypothesis before exporting"),
):
    """
    Write the knowledge graph as JSONL.

    Example:
        paperlink export-graph ./papers/ --hypothesis "gene expression drives phenotype"
    """
    from ..store.export import save_graph

    orchestrator = _load(pdf_paths)

    if hypothesis:
        result = orchestrator.submit_hypothesis(
            title=hypothesis[:80],
            description=hypothesis,
            paper_ids=[p.id for p in orchestrator.papers()],
            tags=["cli"],
        )
        if not result.success:
            rprint(f"[yellow]Hypothesis not linked: {result.error}[/yellow]")

    export = orchestrator.export_graph()
    save_graph(export, output)
    rprint(
        f"[green]Wrote {len(export.nodes)} nodes and "
        f"{len(export.connections)} connections to {output}[/green]"
    )


@app.command()
def serve(
    host: str = typer.Option("0.0.0.0", "--host"),
    port: int = typer.Option(8000, "--port", "-p"),
):
    """Run the REST API."""
    import uvicorn

    uvicorn.run("paperlink.api.main:app", host=host, port=port)


if __name__ == "__main__":
    app()
