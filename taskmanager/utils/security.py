from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional, Protocol

from jose import JWTError, jwt
from passlib.context import CryptContext


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...

    def verify(self, password: str, digest: str) -> bool: ...


class TokenSigner(Protocol):
    def sign(self, claims: Dict[str, Any]) -> str: ...


class BcryptPasswordHasher:
    """Salted bcrypt hashing through passlib"""

    def __init__(self, rounds: int = 12):
        self.pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)

    def hash(self, password: str) -> str:
        return self.pwd_context.hash(password)

    def verify(self, password: str, digest: str) -> bool:
        return self.pwd_context.verify(password, digest)


class JwtTokenSigner:
    """HMAC-signed JWTs carrying issue and expiry timestamps"""

    def __init__(self, secret_key: str, algorithm: str = "HS256", expire_minutes: int = 30):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    def sign(self, claims: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
        to_encode = claims.copy()
        issued_at = datetime.now(timezone.utc)
        expire = issued_at + (expires_delta if expires_delta else timedelta(minutes=self.expire_minutes))
        to_encode.update({"iat": issued_at, "exp": expire})
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def decode(self, token: str) -> Optional[dict]:
        try:
            return jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError:
            return None
