"""FastAPI application for the portfolio site and its blog."""

import pathlib

import fastapi
import fastapi.responses
import fastapi.staticfiles

import common.app
import common.templates

from . import blogs, markdown_render

APP_DIR = pathlib.Path(__file__).resolve().parent

RECENT_POSTS_LIMIT = 5

app = common.app.create_app(title='Portfolio')

app.mount(
    '/assets',
    fastapi.staticfiles.StaticFiles(directory=APP_DIR / 'static'),
    name='assets',
)

templates = common.templates.make_templates(APP_DIR / 'templates')
templates.env.globals['highlight_css'] = markdown_render.highlight_css  # type: ignore[reportUnknownMemberType]


@app.get('/', response_class=fastapi.responses.HTMLResponse)
async def home(request: fastapi.Request) -> fastapi.responses.HTMLResponse:
    """Render the home page with the most recent posts."""
    posts = blogs.get_all_posts_meta()
    return templates.TemplateResponse(
        request=request,
        name='home.html.jinja2',
        context={'posts': posts[:RECENT_POSTS_LIMIT]},
    )


@app.get('/blog', response_class=fastapi.responses.HTMLResponse)
async def blog_index(request: fastapi.Request) -> fastapi.responses.HTMLResponse:
    """Render the blog index page listing all published posts."""
    posts = blogs.get_all_posts_meta()
    return templates.TemplateResponse(
        request=request, name='blog_index.html.jinja2', context={'posts': posts}
    )


@app.get('/blog/{slug}', response_class=fastapi.responses.HTMLResponse)
async def blog_post(
    request: fastapi.Request, slug: str
) -> fastapi.responses.HTMLResponse:
    """Render an individual blog post by slug."""
    post = blogs.get_post_by_slug(slug)
    if post is None:
        raise fastapi.HTTPException(status_code=404, detail='Post not found')
    return templates.TemplateResponse(
        request=request, name='blog_post.html.jinja2', context={'post': post}
    )


@app.get('/rss.xml')
async def rss(request: fastapi.Request) -> fastapi.responses.Response:
    """Render and serve the RSS feed of published posts."""
    posts = blogs.get_all_posts()
    xml = templates.get_template('rss.xml.jinja2').render(posts=posts)  # type: ignore
    return fastapi.responses.Response(content=xml, media_type='application/rss+xml')


@app.exception_handler(404)
async def not_found(
    request: fastapi.Request, exc: fastapi.HTTPException
) -> fastapi.responses.Response:
    """Render HTML 404 pages for browsers and JSON for everything else."""
    if 'text/html' not in request.headers.get('accept', ''):
        return fastapi.responses.JSONResponse(
            status_code=404, content={'detail': exc.detail}
        )
    return templates.TemplateResponse(
        request=request, name='not_found.html.jinja2', status_code=404
    )
