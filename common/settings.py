"""Shared application settings read from environment variables."""

import os
import pathlib

REPO_ROOT = pathlib.Path(__file__).resolve().parent.parent

DOMAIN: str = os.environ.get('DOMAIN', '.anuragmaurya.com')
HOME_URL: str = 'https://' + DOMAIN[1:]

BLOGS_DIR: pathlib.Path = pathlib.Path(
    os.environ.get('BLOGS_DIR', str(REPO_ROOT / 'blogs'))
)

SITE_TITLE: str = os.environ.get('SITE_TITLE', 'Anurag Maurya')
SITE_DESCRIPTION: str = os.environ.get('SITE_DESCRIPTION', 'My Blogs and thoughts')

LOG_LEVEL: str = os.environ.get('LOG_LEVEL', 'INFO').upper()
