"""
HTTP mapping for ActionResult failures.
"""
from fastapi import HTTPException, status

from gallery_admin.schemas import ActionResult, ErrorKind

ERROR_STATUS = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.EMPTY_INPUT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.STORE_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def raise_for_result(result: ActionResult) -> ActionResult:
    """
    Return a successful result unchanged, raise HTTPException for a failed one.
    The failed result itself becomes the response body.
    """
    if result.success:
        return result
    status_code = ERROR_STATUS.get(result.error_kind, status.HTTP_500_INTERNAL_SERVER_ERROR)
    raise HTTPException(status_code=status_code, detail=result.model_dump(mode="json"))
