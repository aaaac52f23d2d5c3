class ErrorCode:
    VALIDATION_ERROR = "VALIDATION_ERROR"
    BUNDLE_NOT_FOUND = "BUNDLE_NOT_FOUND"
    MISSING_API_KEY = "MISSING_API_KEY"
    INVALID_API_KEY = "INVALID_API_KEY"
    STORE_ERROR = "STORE_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"
