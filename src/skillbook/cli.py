import json
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
import uvicorn

from ._config import SkillbookConfig
from ._logging import configure_logging
from .errors import SkillError
from .library import SkillLibrary
from .lint import lint_library
from .prompts import generate_catalog_description, generate_skills_xml, render_skill_prompt
from .scaffold import create_skill

logger = logging.getLogger(__name__)

app = typer.Typer(help="Browse, search and lint a library of Markdown skill documents.", no_args_is_help=True)

LibraryOption = Annotated[
    Optional[Path],
    typer.Option("--library", "-l", help="Library root (defaults to $SKILLBOOK_LIBRARY or ./library)"),
]


def _config(library: Optional[Path], **kwargs) -> SkillbookConfig:
    config = SkillbookConfig(library=library, **kwargs)
    if not config.library.is_dir():
        typer.secho(f"Skills directory not found: {config.library}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=2)
    return config


def _load(library: Optional[Path]) -> SkillLibrary:
    return SkillLibrary.load(_config(library).library)


def _fail(error: Exception) -> None:
    typer.secho(str(error), fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


@app.callback()
def main(
    log_level: Annotated[
        Optional[str], typer.Option("--log-level", help="Logging level (defaults to $LOG_LEVEL or INFO)")
    ] = None,
):
    """Browse, search and lint a library of Markdown skill documents."""
    configure_logging(log_level)


@app.command("list")
def list_skills(
    library: LibraryOption = None,
    category: Annotated[Optional[str], typer.Option("--category", "-c", help="Only list one category")] = None,
):
    """List the skills in the library, grouped by category."""
    skills_library = _load(library)
    skills = skills_library.by_category(category) if category is not None else skills_library.skills
    if not skills:
        typer.echo("No skills found.")
        return

    current = None
    for skill in skills:
        if skill.category != current:
            current = skill.category
            typer.secho(f"{current or '.'}/", bold=True)
        typer.echo(f"  {skill.name:<32} {skill.description}")

    for failure in skills_library.failures:
        typer.secho(f"Skipped {failure.path}: {failure.message}", fg=typer.colors.YELLOW, err=True)


@app.command()
def show(
    name: Annotated[str, typer.Argument(help="Skill name, bare or as category/name")],
    library: LibraryOption = None,
):
    """Print a skill document as written."""
    try:
        skill = _load(library).get(name)
        typer.echo(skill.path.read_text(encoding="utf-8") if skill.path else skill.body)
    except SkillError as e:
        _fail(e)


@app.command()
def prompt(
    name: Annotated[str, typer.Argument(help="Skill name, bare or as category/name")],
    library: LibraryOption = None,
):
    """Print a skill wrapped the way an agent runtime loads it."""
    try:
        typer.echo(render_skill_prompt(_load(library).get(name)))
    except SkillError as e:
        _fail(e)


@app.command()
def search(
    query: Annotated[list[str], typer.Argument(help="Keywords; all of them must match")],
    library: LibraryOption = None,
    category: Annotated[Optional[str], typer.Option("--category", "-c")] = None,
    limit: Annotated[Optional[int], typer.Option("--limit", "-n", help="0 for unlimited")] = None,
):
    """Search skills by keyword."""
    config = _config(library, search_limit=limit)
    hits = SkillLibrary.load(config.library).search(" ".join(query), category=category, limit=config.search_limit)
    if not hits:
        typer.echo("No matching skills.")
        return
    for hit in hits:
        typer.echo(f"{hit.score:>4}  {hit.skill.qualified_name:<48} {hit.skill.description}")


@app.command()
def catalog(
    library: LibraryOption = None,
    xml_only: Annotated[bool, typer.Option("--xml-only", help="Print only the <available_skills> block")] = False,
):
    """Print the skill catalog an agent sees before loading any skill."""
    skills = _load(library).skills
    typer.echo(generate_skills_xml(skills) if xml_only else generate_catalog_description(skills))


@app.command()
def lint(
    library: LibraryOption = None,
    strict: Annotated[bool, typer.Option("--strict", help="Fail on warnings as well as errors")] = False,
    disable: Annotated[
        Optional[list[str]], typer.Option("--disable", "-d", help="Rule code to skip, may be repeated")
    ] = None,
    output_format: Annotated[str, typer.Option("--format", help="text or json")] = "text",
):
    """Check every document against the library's authoring conventions."""
    config = _config(library, disabled_rules=disable)
    report = lint_library(config.library, disabled=config.disabled_rules)

    if output_format == "json":
        typer.echo(json.dumps(report.model_dump(mode="json"), indent=2))
    else:
        for issue in report.issues:
            color = typer.colors.RED if issue.severity.value == "error" else typer.colors.YELLOW
            typer.secho(issue.format(config.library), fg=color)
        typer.echo(
            f"{report.checked} document(s) checked: "
            f"{len(report.errors)} error(s), {len(report.warnings)} warning(s)"
        )

    if not report.ok(strict=strict):
        raise typer.Exit(code=1)


@app.command()
def new(
    name: Annotated[str, typer.Argument(help="Skill name, lowercase and hyphenated")],
    category: Annotated[str, typer.Option("--category", "-c", help="Topical directory, e.g. writing-and-content")],
    description: Annotated[str, typer.Option("--description", help="One-line summary of the skill")],
    library: LibraryOption = None,
    author: Annotated[Optional[str], typer.Option("--author")] = None,
    version: Annotated[str, typer.Option("--version")] = "1.0.0",
    license: Annotated[str, typer.Option("--license")] = "MIT",
    bundle: Annotated[bool, typer.Option("--bundle", help="Create <name>/SKILL.md instead of <name>.md")] = False,
    force: Annotated[bool, typer.Option("--force", help="Overwrite an existing document")] = False,
):
    """Create a new skill document from the standard template."""
    root = library or SkillbookConfig().library
    try:
        path = create_skill(
            root,
            category,
            name,
            description,
            author=author,
            version=version,
            license=license,
            bundle=bundle,
            force=force,
        )
    except (ValueError, FileExistsError) as e:
        _fail(e)
    typer.echo(f"Created {path}")


@app.command()
def serve(
    library: LibraryOption = None,
    host: str = "127.0.0.1",
    port: int = 8080,
    workers: int = 1,
):
    """Serve the library as a read-only HTTP catalog."""
    from .web import create_app

    config = _config(library)
    server = create_app(config.library, disabled_rules=config.disabled_rules, search_limit=config.search_limit)
    uvicorn.run(server, host=host, port=port, workers=workers)


def run():
    app()


if __name__ == "__main__":
    run()
