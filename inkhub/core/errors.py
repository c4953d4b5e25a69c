"""도메인 에러 — 서비스 계층이 발생시키고 API 계층이 HTTP 상태로 변환한다.

각 에러는 (kind, message) 쌍을 갖는다. Core/Service는 전송 계층의
상태 코드 체계를 모른다.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """에러 유형"""

    NOT_FOUND = "not_found"
    FORBIDDEN = "forbidden"
    INVALID_ARGUMENT = "invalid_argument"


class DomainError(Exception):
    """모든 도메인 에러의 기반 클래스"""

    kind: ErrorKind = ErrorKind.INVALID_ARGUMENT

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, str]:
        return {"kind": self.kind.value, "message": self.message}


class NotFoundError(DomainError):
    """계정 또는 요청이 없음 (작업 도중 사라진 경우 포함)"""

    kind = ErrorKind.NOT_FOUND


class ForbiddenError(DomainError):
    """행위자가 대상과 필요한 관계에 있지 않음"""

    kind = ErrorKind.FORBIDDEN


class InvalidArgumentError(DomainError):
    """잘못된 역할 조합, 자기 참조, 중복, 커밋 시점 상태 충돌"""

    kind = ErrorKind.INVALID_ARGUMENT
