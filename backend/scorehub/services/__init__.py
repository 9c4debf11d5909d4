"""Account domain services.

HTTP routes call into these; transport concerns stay in the blueprints.
"""

from .accounts import AccountService
from .tokens import TokenIssuer

__all__ = ['AccountService', 'TokenIssuer']
