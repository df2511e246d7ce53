from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from src import exceptions
from src.auth.permissions import authorize
from src.auth.schemas import Caller, Capability
from src.auth.utils import verify_token

bearer_scheme = HTTPBearer(auto_error=False)

def get_current_caller(credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme)) -> Caller:
    """Get the authenticated caller from the bearer token"""
    if credentials is None:
        raise exceptions.InvalidCredentials()
    return verify_token(credentials.credentials)

def require_capability(capability: Capability):
    """Build a dependency that admits only callers whose role grants `capability`"""

    def dependency(caller: Caller = Depends(get_current_caller)) -> Caller:
        return authorize(caller, capability)

    return dependency
