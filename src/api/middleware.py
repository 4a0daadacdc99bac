# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Visitor identification middleware."""

import logging
import uuid

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from src.config import settings

logger = logging.getLogger(__name__)


class VisitorCookieMiddleware(BaseHTTPMiddleware):
    """Issue an anonymous visitor id cookie when the request has none.

    The id is exposed to endpoints as ``request.state.user_id``.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        cookie_name = settings.visitor_cookie_name
        user_id = request.cookies.get(cookie_name)
        issued = not user_id
        if issued:
            user_id = str(uuid.uuid4())
            logger.debug(f"Issued visitor id {user_id}")

        request.state.user_id = user_id
        response = await call_next(request)

        if issued:
            response.set_cookie(cookie_name, user_id, httponly=True)
        return response
