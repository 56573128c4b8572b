"""CLI main entry point."""

import json
import logging
from pathlib import Path
from typing import Any, Optional

import click

from .builder import EditRequest
from .client import TemplateServiceClient
from .config import Config
from .consts import CONFIG_FILE_DEFAULT
from .enums import TargetKind
from .errors import LiveEditException
from .log import setup as setup_log
from .models import Coordinates, parse_section_number
from .queue import RequestQueue
from .routes import queue_entry

logger = logging.getLogger(__name__)


def _load_config(ctx) -> Config:
    config_path = ctx.obj["config_path"]
    cfg = Config.load_from_file(config_path)
    setup_log(cfg.log_file)
    logger.info(f"Loaded configuration file: {config_path}")
    return cfg


def _form_template_id(cfg: Config, form_template_id: Optional[str]) -> str:
    form_template_id = form_template_id or cfg.editor.form_template_id
    if not form_template_id:
        raise click.UsageError("No form template id given and none configured under [editor]")
    return form_template_id


def _echo_json(data: Any) -> None:
    click.echo(json.dumps(data, indent=2, ensure_ascii=False))


def _parse_coordinates(raw: Optional[str]) -> Optional[Coordinates]:
    if not raw:
        return None
    try:
        task_section, task = (int(part) for part in raw.split(","))
    except ValueError as e:
        raise click.BadParameter(f"Expected two comma separated numbers, got {raw!r}") from e
    return Coordinates(task_section_number=task_section, task_number=task)


@click.group()
@click.option("--config", "-c", default=CONFIG_FILE_DEFAULT, help="Configuration file path")
@click.pass_context
def cli(ctx, config: str):
    """Live editing of form templates against a template service."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config


@cli.command(name="fetch-section")
@click.argument("section_number")
@click.option("--form-template", "-f", "form_template_id", default=None, help="Form template id")
@click.pass_context
def fetch_section(ctx, section_number: str, form_template_id: Optional[str]):
    """Print the stored JSON of one section."""
    try:
        cfg = _load_config(ctx)
        client = TemplateServiceClient(cfg.service)
        data = client.fetch_section(_form_template_id(cfg, form_template_id), parse_section_number(section_number))
    except LiveEditException as e:
        logger.error(f"Error when fetching section: {e}")
        raise click.ClickException(f"Error when fetching section: {e}")
    _echo_json(data)


@cli.command(name="fetch-template")
@click.option("--form-template", "-f", "form_template_id", default=None, help="Form template id")
@click.option(
    "--part",
    type=click.Choice(["template", "summary", "acknowledgement"]),
    default="template",
    show_default=True,
    help="Which part of the template to fetch",
)
@click.option("--coordinates", default=None, help="Task coordinates of a summary, e.g. 0,1")
@click.pass_context
def fetch_template(ctx, form_template_id: Optional[str], part: str, coordinates: Optional[str]):
    """Print the stored JSON of a form template or one of its top level parts."""
    try:
        cfg = _load_config(ctx)
        client = TemplateServiceClient(cfg.service)
        form_template_id = _form_template_id(cfg, form_template_id)
        match part:
            case "summary":
                data = client.fetch_summary_section(form_template_id, coordinates)
            case "acknowledgement":
                data = client.fetch_acknowledgement(form_template_id)
            case _:
                data = client.fetch_form_template(form_template_id)
    except LiveEditException as e:
        logger.error(f"Error when fetching {part}: {e}")
        raise click.ClickException(f"Error when fetching {part}: {e}")
    _echo_json(data)


@cli.command(name="push")
@click.argument("target_kind", type=click.Choice([kind.value for kind in TargetKind]))
@click.argument("payload_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--form-template", "-f", "form_template_id", default=None, help="Form template id")
@click.option("--section-number", "-s", default=None, help="Section number, e.g. n0 or 0,1,n2")
@click.option("--component-id", default=None, help="Form component id")
@click.option("--section-path", default=None, help="Section path inside the template")
@click.option("--coordinates", default=None, help="Task coordinates of a summary, e.g. 0,1")
@click.option("--timeout", type=float, default=None, help="Seconds to wait for the round trip")
@click.pass_context
def push(
    ctx,
    target_kind: str,
    payload_file: Path,
    form_template_id: Optional[str],
    section_number: Optional[str],
    component_id: Optional[str],
    section_path: Optional[str],
    coordinates: Optional[str],
    timeout: Optional[float],
):
    """Send one update from a JSON file through the request queue and print the response."""
    try:
        payload = json.loads(payload_file.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise click.ClickException(f"Invalid payload file {payload_file}: {e}")

    try:
        cfg = _load_config(ctx)
        request = EditRequest(
            target_kind=TargetKind(target_kind),
            form_template_id=_form_template_id(cfg, form_template_id),
            payload=payload,
            section_number=parse_section_number(section_number) if section_number is not None else None,
            access_code=cfg.service.access_code,
            component_id=component_id,
            section_path=section_path,
            coordinates=_parse_coordinates(coordinates),
        )

        responses: list[dict[str, Any]] = []
        queue = RequestQueue(TemplateServiceClient(cfg.service))
        queue.enqueue(queue_entry(cfg.service.base_url, request, responses.append))
        if not queue.drain(timeout):
            raise click.ClickException(f"No response within {timeout} seconds")
    except LiveEditException as e:
        logger.error(f"Push failed: {e}")
        raise click.ClickException(str(e))

    _echo_json(responses[0])
    if responses[0].get("error"):
        raise click.ClickException("The service reported an error")


def main():
    cli(obj={})


if __name__ == "__main__":
    main()
