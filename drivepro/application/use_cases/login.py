import structlog

from ...domain.errors import ValidationError, AuthError, ForbiddenError
from ..dto import LoginResult
from ..interfaces import IStore, ITokenIssuer

logger = structlog.get_logger()


class Login:
    def __init__(self, store: IStore, issue_token: ITokenIssuer):
        self.store = store
        self.issue_token = issue_token

    def execute(self, email: str | None, password: str | None, user_type: str | None) -> LoginResult:
        if not email or not password or not user_type:
            raise ValidationError("email, password and userType are required in the request body")

        with self.store.atomic():
            user = self.store.users.get_by_email(email)
            # the account must exist under the role the client logged in as
            if user is None or user.role.value != user_type or user.password != password:
                logger.warning("login_rejected", email=email, user_type=user_type, reason="credentials")
                raise AuthError("Invalid credentials")
            if not user.is_active:
                logger.warning("login_rejected", email=email, user_type=user_type, reason="inactive")
                raise ForbiddenError("Account is inactive")
            token = self.issue_token(user)

        logger.info("login_succeeded", user_id=user.id, role=user.role.value)
        return LoginResult(token=token, user=user)
