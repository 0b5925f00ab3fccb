from placement.schemas.common.base import BaseResponseSchema, BaseSchema
from placement.schemas.common.response import ErrorDetail, ErrorResponse

__all__ = ["BaseResponseSchema", "BaseSchema", "ErrorDetail", "ErrorResponse"]
