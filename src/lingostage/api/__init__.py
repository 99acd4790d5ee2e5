"""aiohttp route handlers: page data, link resolution and language switching."""
