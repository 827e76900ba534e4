"""a2ui-render - apply a message batch and print the rendered tree(s).

Examples:
    a2ui-render batch.json
    a2ui-render batch.json --surface main --indent 2
    cat batch.json | a2ui-render -
"""

import sys

import click

from .core import UnprocessableBatchError, configure_from_settings, get_settings, safe_json_dumps
from .core.container import create_container
from .interpreter.processor import MessageProcessor
from .render.renderer import SurfaceRenderer

EXIT_UNPROCESSABLE = 2


@click.command("a2ui-render")
@click.argument("batch", type=click.File("r", encoding="utf-8"))
@click.option("--surface", "-s", "surface_id", default=None, help="Render only this surface")
@click.option("--indent", "-i", type=click.IntRange(min=0), default=0, help="JSON indent (0 = compact)")
def main(batch, surface_id: str | None, indent: int) -> None:
    """Apply BATCH (a JSON message array, or - for stdin) and print the render tree."""
    settings = get_settings()
    configure_from_settings(settings)

    container = create_container(settings)
    processor = container.get(MessageProcessor)
    renderer = container.get(SurfaceRenderer)

    try:
        processor.apply_batch(batch.read())
    except UnprocessableBatchError as e:
        click.echo(f"error: {e}", err=True)
        sys.exit(EXIT_UNPROCESSABLE)

    if surface_id is not None:
        node = renderer.render_surface(surface_id)
        output = node.to_dict() if node is not None else None
    else:
        output = {}
        for surface in processor.store.list_surfaces():
            node = renderer.render_surface(surface.surface_id)
            output[surface.surface_id] = node.to_dict() if node is not None else None

    click.echo(safe_json_dumps(output, indent=indent))


if __name__ == "__main__":
    main()
