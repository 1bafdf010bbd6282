"""
Messages Router
Localized UI text for clients
"""

from fastapi import APIRouter
from app.i18n import get_bundle, supported_locales

router = APIRouter(prefix="/messages", tags=["Localization"])


@router.get("")
async def list_locales():
    """List supported locale tags."""
    return {"locales": supported_locales()}


@router.get("/{locale}")
async def get_messages(locale: str):
    """
    Get the message bundle for a locale.
    Unknown locales get the English bundle.
    """
    return get_bundle(locale).to_dict()
