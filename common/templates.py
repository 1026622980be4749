"""Factory for creating Jinja2Templates with standard site globals."""

import datetime
import pathlib

import fastapi.templating

import common.settings

DATE_FORMAT = '%d.%m.%Y'


def format_date(value: datetime.date, fmt: str = DATE_FORMAT) -> str:
    """Format a date for display, e.g. ``15.01.2025``."""
    return value.strftime(fmt)


def make_templates(
    directory: pathlib.Path | str,
) -> fastapi.templating.Jinja2Templates:
    """Create a Jinja2Templates instance with site globals and filters pre-set."""
    templates = fastapi.templating.Jinja2Templates(directory=str(directory))
    templates.env.filters['datefmt'] = format_date  # type: ignore[assignment]
    templates.env.globals['domain'] = common.settings.DOMAIN  # type: ignore[reportUnknownMemberType]
    templates.env.globals['home_url'] = common.settings.HOME_URL  # type: ignore[reportUnknownMemberType]
    templates.env.globals['site_title'] = common.settings.SITE_TITLE  # type: ignore[reportUnknownMemberType]
    templates.env.globals['site_description'] = common.settings.SITE_DESCRIPTION  # type: ignore[reportUnknownMemberType]
    return templates
