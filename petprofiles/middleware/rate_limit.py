"""
Rate limiting por endpoint usando slowapi.
"""
from fastapi import Request, HTTPException
from limits import parse
from slowapi.util import get_remote_address


def apply_rate_limit(request: Request, limit: str):
    """
    Aplica rate limiting a un endpoint concreto.
    Uso: apply_rate_limit(request, "60/minute")

    Si el limiter no está configurado (por ejemplo, en tests), no hace nada.
    """
    limiter = getattr(request.app.state, "limiter", None)
    if limiter is None:
        return

    key = get_remote_address(request)

    # la estrategia de `limits` que hay debajo del Limiter de slowapi;
    # hit() incrementa el contador y devuelve False si ya se superó
    if not limiter.limiter.hit(parse(limit), key, "writes"):
        raise HTTPException(
            status_code=429,
            detail=f"Too many requests. Limit: {limit}. Try again later.",
        )
