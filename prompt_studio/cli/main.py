"""PromptStudio CLI (`studio`)."""

from __future__ import annotations

import json
import sys
from typing import Any

import click

from prompt_studio.cli.client import StudioClient


def _columns_text(rows: list[dict], columns: list[str]) -> str:
    """Render rows as left-aligned columns under an upper-case header."""
    if not rows:
        return "Nothing found."
    cells = [[str(row.get(c) or "") for c in columns] for row in rows]
    widths = [max([len(c)] + [len(r[i]) for r in cells]) for i, c in enumerate(columns)]

    def line(values: list[str]) -> str:
        return "  ".join(v.ljust(w) for v, w in zip(values, widths)).rstrip()

    header = line([c.upper() for c in columns])
    return "\n".join([header, line(["-" * w for w in widths])] + [line(r) for r in cells])


def _show(ctx: click.Context, data: Any, columns: list[str] | None = None) -> None:
    if columns and isinstance(data, list) and ctx.meta.get("output_format") != "json":
        click.echo(_columns_text(data, columns))
    else:
        click.echo(json.dumps(data, indent=2, default=str))


def _parse_inputs(pairs: tuple[str, ...]) -> dict[str, str]:
    inputs: dict[str, str] = {}
    for pair in pairs:
        if "=" not in pair:
            raise click.BadParameter(f"expected key=value, got '{pair}'", param_hint="--input")
        key, value = pair.split("=", 1)
        inputs[key.strip()] = value
    return inputs


def _read_text(text: str | None, file_path: str | None) -> str:
    if text:
        return text
    if file_path:
        with open(file_path) as f:
            return f.read()
    return sys.stdin.read()


@click.group()
@click.option("--api", default="http://localhost:8400", envvar="STUDIO_API", help="API base URL")
@click.option("--format", "output_format", type=click.Choice(["table", "json"]), default="table")
@click.option("--token", default=None, envvar="STUDIO_TOKEN", help="Bearer token")
@click.pass_context
def cli(ctx: click.Context, api: str, output_format: str, token: str | None) -> None:
    """Manage templates and snippets, and generate documents."""
    ctx.obj = StudioClient(base_url=api, auth_token=token)
    ctx.meta["output_format"] = output_format


# --- Template commands ---


@cli.group()
def template() -> None:
    """Manage prompt templates."""


@template.command("list")
@click.pass_context
def template_list(ctx: click.Context) -> None:
    """List your templates."""
    client: StudioClient = ctx.obj
    _show(ctx, client.list_templates(), ["id", "title", "model_id", "updated_at"])


@template.command("show")
@click.argument("template_id")
@click.pass_context
def template_show(ctx: click.Context, template_id: str) -> None:
    """Show a template."""
    client: StudioClient = ctx.obj
    _show(ctx, client.get_template(template_id))


@template.command("create")
@click.option("--model", "model_id", required=True, help="Target model, e.g. gpt-4o")
@click.option("--title", default=None, help="Title; generated when omitted")
@click.option("--prompt", "raw_prompt", default=None, help="Raw prompt text")
@click.option("--file", "-f", "file_path", default=None, help="Read the raw prompt from a file")
@click.option("--no-optimize", is_flag=True, help="Save the raw prompt as-is")
@click.pass_context
def template_create(
    ctx: click.Context,
    model_id: str,
    title: str | None,
    raw_prompt: str | None,
    file_path: str | None,
    no_optimize: bool,
) -> None:
    """Optimize a raw prompt and save it as a template. Reads stdin without --prompt/--file."""
    client: StudioClient = ctx.obj
    raw = _read_text(raw_prompt, file_path)

    if no_optimize:
        optimized = raw
        if not title:
            raise click.UsageError("--title is required with --no-optimize")
    else:
        prepared = client.prepare(raw)
        optimized = prepared["optimized_prompt"]
        title = title or prepared["title"]

    result = client.create_template(
        {"title": title, "raw_prompt": raw, "optimized_prompt": optimized, "model_id": model_id}
    )
    _show(ctx, result)


@template.command("delete")
@click.argument("template_id")
@click.pass_context
def template_delete(ctx: click.Context, template_id: str) -> None:
    """Delete a template."""
    client: StudioClient = ctx.obj
    client.delete_template(template_id)
    click.echo(f"Deleted template '{template_id}'")


# --- Snippet commands ---


@cli.group()
def snippet() -> None:
    """Manage context snippets."""


@snippet.command("list")
@click.option("--search", default=None)
@click.pass_context
def snippet_list(ctx: click.Context, search: str | None) -> None:
    """List your snippets."""
    client: StudioClient = ctx.obj
    _show(ctx, client.list_snippets(search), ["id", "name", "updated_at"])


@snippet.command("suggest")
@click.argument("query")
@click.pass_context
def snippet_suggest(ctx: click.Context, query: str) -> None:
    """Autocomplete a partial @name, e.g. `studio snippet suggest @comp`."""
    client: StudioClient = ctx.obj
    _show(ctx, client.suggest_snippets(query), ["id", "name"])


@snippet.command("create")
@click.argument("name")
@click.option("--content", default=None)
@click.option("--file", "-f", "file_path", default=None)
@click.pass_context
def snippet_create(ctx: click.Context, name: str, content: str | None, file_path: str | None) -> None:
    """Create a snippet, e.g. `studio snippet create @company-info -f about.md`."""
    client: StudioClient = ctx.obj
    result = client.create_snippet({"name": name, "content": _read_text(content, file_path)})
    _show(ctx, result)


@snippet.command("delete")
@click.argument("snippet_id")
@click.pass_context
def snippet_delete(ctx: click.Context, snippet_id: str) -> None:
    """Delete a snippet."""
    client: StudioClient = ctx.obj
    client.delete_snippet(snippet_id)
    click.echo(f"Deleted snippet '{snippet_id}'")


# --- Authoring ---


@cli.command()
@click.argument("raw_prompt", required=False)
@click.pass_context
def optimize(ctx: click.Context, raw_prompt: str | None) -> None:
    """Optimize a raw prompt (argument or stdin)."""
    client: StudioClient = ctx.obj
    result = client.optimize(_read_text(raw_prompt, None))
    click.echo(result["optimized_prompt"])


# --- Generation ---


@cli.command()
@click.option("--user", "user_id", required=True, help="Owner id (must match the token)")
@click.option("--template", "template_id", default=None)
@click.option("--prompt", "raw_prompt", default=None)
@click.option("--input", "-i", "inputs", multiple=True, help="key=value placeholder values")
@click.option("--provider", type=click.Choice(["openai", "anthropic", "grok"]), default=None)
@click.option("--model", "model_id", default=None)
@click.option("--preview", is_flag=True, help="Only show the resolved prompt")
@click.pass_context
def generate(
    ctx: click.Context,
    user_id: str,
    template_id: str | None,
    raw_prompt: str | None,
    inputs: tuple[str, ...],
    provider: str | None,
    model_id: str | None,
    preview: bool,
) -> None:
    """Generate a document from a template or raw prompt."""
    client: StudioClient = ctx.obj
    values = _parse_inputs(inputs)

    if preview:
        text = raw_prompt
        if template_id:
            text = client.get_template(template_id)["optimized_prompt"]
        if not text:
            raise click.UsageError("--template or --prompt is required")
        result = client.resolve({"text": text, "inputs": values})
        click.echo(result["text"])
        for placeholder in result.get("unresolved_placeholders", []):
            click.echo(f"Unresolved: {placeholder}", err=True)
        return

    data: dict[str, Any] = {
        "user_id": user_id,
        "prompt_template_id": template_id,
        "raw_prompt": raw_prompt,
        "inputs": values,
        "llm_provider": provider,
        "model_id": model_id,
    }
    result = client.generate({k: v for k, v in data.items() if v is not None})
    click.echo(result["content"])
    if ctx.meta.get("output_format") == "json":
        click.echo(json.dumps(result["metadata"], indent=2, default=str), err=True)


# --- Operations ---


@cli.command()
@click.argument("user_id")
@click.option("--expires", default=60, show_default=True, help="Lifetime in minutes")
def token(user_id: str, expires: int) -> None:
    """Issue a development bearer token signed with JWT_SECRET."""
    from prompt_studio.config import get_settings
    from prompt_studio.utils.security import create_access_token

    settings = get_settings()
    if not settings.jwt_secret:
        raise click.ClickException("JWT_SECRET is not configured")
    click.echo(create_access_token(user_id, settings.jwt_secret, settings.jwt_algorithm, expires))


@cli.command()
@click.option("--host", default="0.0.0.0")
@click.option("--port", default=None, type=int)
@click.option("--reload", is_flag=True)
def serve(host: str, port: int | None, reload: bool) -> None:
    """Run the API server."""
    import uvicorn

    from prompt_studio.config import get_settings

    uvicorn.run(
        "prompt_studio.main:app", host=host, port=port or get_settings().port, reload=reload
    )


if __name__ == "__main__":
    cli()
