"""Mapping of upstream provider failures onto HTTP errors."""

from fastapi import HTTPException, status

from applihero.domain.exceptions import ChatProviderError, EmbeddingProviderError


def upstream_error(e: ChatProviderError | EmbeddingProviderError) -> HTTPException:
    """Chat errors keep their 4xx/5xx status; embedding errors are always 502."""
    if isinstance(e, ChatProviderError) and 400 <= e.status_code < 600:
        code = e.status_code
    else:
        code = status.HTTP_502_BAD_GATEWAY
    return HTTPException(status_code=code, detail=f"[{e.provider}] {e.message}")
