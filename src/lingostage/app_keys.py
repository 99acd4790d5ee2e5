"""Application keys for type-safe app configuration access."""

from aiohttp import web

from lingostage.config import I18nConfig
from lingostage.core.planner import PageSet
from lingostage.core.resources import FileTranslationStore

page_set_key = web.AppKey("page_set", PageSet)
store_key = web.AppKey("store", FileTranslationStore)
i18n_key = web.AppKey("i18n", I18nConfig)
