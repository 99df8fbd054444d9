from .response_wrappers import ApiResponse, ErrorBody, ErrorResponse, error_response

__all__ = ["ApiResponse", "ErrorBody", "ErrorResponse", "error_response"]
