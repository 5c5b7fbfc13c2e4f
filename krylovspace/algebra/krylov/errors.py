'''
file:       krylovspace/algebra/krylov/errors.py

Error codes and the exception raised by the Krylov subspace routines.

Only precondition violations are errors. A happy breakdown is a regular
outcome and is reported through the dimension of the returned subspace.
'''

from typing import Optional
from enum import Enum, unique

# -----------------------------------------------------------------------------
#! Errors
# -----------------------------------------------------------------------------

@unique
class KrylovErrorMsg(Enum):
    '''
    Enumeration class for Krylov error messages.
    '''
    DIM_MISMATCH        = 201
    TYPE_MISMATCH       = 202
    INVALID_INPUT       = 203

    def __str__(self):
        return self.name.replace('_', ' ').title()

    def __repr__(self):
        return f"<{self.__class__.__name__}.{self.name}: '{str(self)}'>"

class KrylovError(Exception):
    '''
    Raised when the input of a Krylov routine violates its preconditions.
    '''
    def __init__(self, code: KrylovErrorMsg, message: Optional[str] = None):
        self.code       = code
        self.message    = message if message else str(code)
        super().__init__(self.message)

    def __str__(self):
        return f"[KrylovError {self.code.name} ({self.code.value})]: {self.message}"

    def __repr__(self):
        return self.__str__()

# -----------------------------------------------------------------------------
#! EOF
# -----------------------------------------------------------------------------
