from .base_url import BaseUrlResolver
from .html import HtmlQuery, extract_attr, extract_text, parse_html, select_items
from .provider_context import ProviderContext, build_provider_context

__all__ = [
    "BaseUrlResolver",
    "HtmlQuery",
    "ProviderContext",
    "build_provider_context",
    "extract_attr",
    "extract_text",
    "parse_html",
    "select_items",
]
