# /gradeflow/core/deps.py

"""
FastAPI dependencies that resolve the acting user.

Authentication happens upstream: the gateway in front of this service
verifies the caller's credentials and forwards the authenticated user's ID
in the `X-User-Id` header. This module only turns that ID into a
`Principal`; it never issues or checks credentials itself.
"""

from typing import Optional

from fastapi import Depends, Header, HTTPException, status

from ..models.principal_model import Principal
from ..services.database_service import DatabaseService, get_db_service


def get_current_principal(
    x_user_id: Optional[str] = Header(default=None),
    db: DatabaseService = Depends(get_db_service),
) -> Principal:
    if not x_user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing authenticated user.",
        )

    user = db.get_user_by_id(x_user_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unknown user.",
        )

    return Principal.from_user(user)
