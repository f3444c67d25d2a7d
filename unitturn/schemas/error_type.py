from enum import Enum

class ErrorType(str, Enum):
    '''
    Structured classification of what went wrong while serving a request.

    INPUT_ERROR: request is malformed or refers to something inconsistent
    VALIDATION_ERROR: request body failed schema validation (negative amounts, wrong types)
    NOT_FOUND: referenced instance does not exist
    STATE_CONFLICT: operation not allowed in the current instance state, e.g. saving an exported turn
    DATABASE_ERROR: engine / connection / constraint failure
    SYSTEM_ERROR: anything unclassified
    '''
    # input problems
    INPUT_ERROR = "INPUT_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"

    # state problems
    STATE_CONFLICT = "STATE_CONFLICT"

    # system problems
    DATABASE_ERROR = "DATABASE_ERROR"
    SYSTEM_ERROR = "SYSTEM_ERROR"


HTTP_STATUS = {
    ErrorType.INPUT_ERROR: 400,
    ErrorType.VALIDATION_ERROR: 400,
    ErrorType.NOT_FOUND: 404,
    ErrorType.STATE_CONFLICT: 409,
    ErrorType.DATABASE_ERROR: 500,
    ErrorType.SYSTEM_ERROR: 500,
}
