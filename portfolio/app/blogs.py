"""Blog post loading, validation and rendering.

Posts live as markdown files with YAML frontmatter in ``BLOGS_DIR``. Every call
reads the directory afresh; nothing is cached between requests.
"""

import datetime
import logging
import pathlib
from typing import Any

import dateutil.parser  # type: ignore[reportMissingTypeStubs]
import frontmatter  # type: ignore[reportMissingTypeStubs]
import pydantic
import yaml

import common.settings

from . import markdown_render

logger = logging.getLogger(__name__)

BLOGS_DIR: pathlib.Path = common.settings.BLOGS_DIR

MARKDOWN_SUFFIX = '.md'


class BlogContentError(ValueError):
    """Base class for problems with the content store."""


class DuplicateSlugError(BlogContentError):
    """Raised when two markdown files normalise to the same slug."""

    def __init__(self, slug: str, paths: list[pathlib.Path]) -> None:
        self.slug = slug
        self.paths = paths
        names = ', '.join(p.name for p in paths)
        super().__init__(f'Duplicate slug detected: {slug} ({names})')


class FrontmatterValidationError(BlogContentError):
    """Raised when a post's frontmatter is missing required fields."""

    def __init__(self, label: str, slug: str, errors: list[str]) -> None:
        self.slug = slug
        self.errors = errors
        details = '\n  - '.join(errors)
        super().__init__(f'[{label}] Validation failed:\n  - {details}')


class BlogPostMeta(pydantic.BaseModel):
    """Post metadata, without the body, for listing views."""

    model_config = pydantic.ConfigDict(frozen=True)

    slug: str
    title: str
    description: str | None = None
    date: datetime.datetime
    tags: tuple[str, ...] = ()


class BlogPost(BlogPostMeta):
    """A fully loaded post: metadata plus raw and rendered body."""

    published: bool = True
    content: str
    content_html: str

    def to_meta(self) -> BlogPostMeta:
        """Drop the body and publication flag."""
        return BlogPostMeta(
            slug=self.slug,
            title=self.title,
            description=self.description,
            date=self.date,
            tags=self.tags,
        )


def slug_for(path: pathlib.Path) -> str:
    """Derive a post slug from its filename: the lower-cased stem."""
    return path.stem.lower()


def _label(path: pathlib.Path) -> str:
    return f'{path.parent.name}/{path.name}'


def _markdown_files() -> list[pathlib.Path]:
    """List markdown files in BLOGS_DIR in filename order."""
    if not BLOGS_DIR.is_dir():
        logger.warning('Blogs directory not found: %s', BLOGS_DIR)
        return []
    return sorted(
        path
        for path in BLOGS_DIR.iterdir()
        if path.is_file() and path.suffix.lower() == MARKDOWN_SUFFIX
    )


class _FrontmatterLoader(yaml.SafeLoader):
    """SafeLoader that keeps impossible timestamps (``2024-02-30``) as strings.

    The date is then reported by validate_frontmatter instead of failing inside
    the YAML constructor.
    """


def _construct_timestamp(loader: yaml.SafeLoader, node: yaml.ScalarNode) -> Any:
    try:
        return loader.construct_yaml_timestamp(node)
    except ValueError:
        return loader.construct_scalar(node)


_FrontmatterLoader.add_constructor('tag:yaml.org,2002:timestamp', _construct_timestamp)


class _FrontmatterHandler(frontmatter.YAMLHandler):
    def load(self, fm: str, **kwargs: Any) -> Any:
        return yaml.load(fm, Loader=_FrontmatterLoader)


def parse_date(value: Any) -> datetime.datetime | None:
    """Coerce a frontmatter date value, returning None if it cannot be parsed.

    YAML already turns unquoted ISO dates into ``date``/``datetime`` objects;
    strings go through dateutil, which also accepts forms such as
    ``2024/01/15`` and ``January 15, 2024``. Plain dates become midnight and
    aware datetimes are converted to naive UTC so every post sorts together.
    """
    if isinstance(value, str):
        try:
            value = dateutil.parser.parse(value.strip())
        except (ValueError, OverflowError):
            return None
    if isinstance(value, datetime.datetime):
        if value.tzinfo is not None:
            value = value.astimezone(datetime.timezone.utc).replace(tzinfo=None)
        return value
    if isinstance(value, datetime.date):
        return datetime.datetime.combine(value, datetime.time())
    return None


def validate_frontmatter(data: dict[str, Any], label: str, slug: str) -> None:
    """Check required frontmatter fields, warning about missing optional ones.

    Raises FrontmatterValidationError listing every problem found.
    """
    errors: list[str] = []

    title = data.get('title')
    if not isinstance(title, str) or not title:
        errors.append("Missing or invalid 'title' field")

    date = data.get('date')
    if date is None or date == '':
        errors.append("Missing 'date' field")
    elif parse_date(date) is None:
        errors.append(f'Invalid date format: {date}')

    if not data.get('description'):
        logger.warning(
            "[%s] Warning: Missing 'description' field (recommended for SEO)", label
        )

    if errors:
        raise FrontmatterValidationError(label, slug, errors)


def _load_path(path: pathlib.Path) -> BlogPost:
    slug = slug_for(path)
    label = _label(path)
    try:
        post = frontmatter.load(path.as_posix(), handler=_FrontmatterHandler())
    except yaml.YAMLError as exc:
        raise FrontmatterValidationError(
            label, slug, [f'Invalid frontmatter: {exc}']
        ) from exc
    data = post.metadata

    validate_frontmatter(data, label, slug)

    return BlogPost(
        slug=slug,
        title=data['title'],
        description=data.get('description') or None,
        date=parse_date(data['date']),
        tags=data.get('tags') or (),
        published=data.get('published') is not False,
        content=post.content,
        content_html=markdown_render.render_markdown(post.content),
    )


def _paths_by_slug() -> dict[str, pathlib.Path]:
    seen: dict[str, pathlib.Path] = {}
    for path in _markdown_files():
        slug = slug_for(path)
        if slug in seen:
            raise DuplicateSlugError(slug, [seen[slug], path])
        seen[slug] = path
    return seen


def get_all_slugs() -> list[str]:
    """Return the slug of every markdown file in BLOGS_DIR.

    Raises DuplicateSlugError if two files normalise to the same slug.
    """
    return list(_paths_by_slug())


def get_post_by_slug(slug: str) -> BlogPost | None:
    """Load a single post, or return None if no file has that slug.

    Unpublished posts are returned too; filtering is left to listing views.
    """
    slug = slug.lower()
    matches = [path for path in _markdown_files() if slug_for(path) == slug]
    if not matches:
        return None
    if len(matches) > 1:
        raise DuplicateSlugError(slug, matches)
    return _load_path(matches[0])


def get_all_posts() -> list[BlogPost]:
    """Load all published posts, sorted newest first.

    Any invalid post aborts the whole load. Posts sharing a timestamp keep
    filename order.
    """
    posts = [_load_path(path) for path in _paths_by_slug().values()]
    published = [post for post in posts if post.published]
    return sorted(published, key=lambda p: p.date, reverse=True)


def get_all_posts_meta() -> list[BlogPostMeta]:
    """Metadata for all published posts, sorted newest first."""
    return [post.to_meta() for post in get_all_posts()]
