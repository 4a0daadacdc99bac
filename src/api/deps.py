# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""API dependencies for dependency injection."""

from fastapi import HTTPException, Request, status

from src.database import get_db

__all__ = ["get_db", "get_visitor_id"]


def get_visitor_id(request: Request) -> str:
    """Get the visitor identifier assigned by VisitorCookieMiddleware."""
    user_id = getattr(request.state, "user_id", None)
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Visitor not identified",
        )
    return user_id
