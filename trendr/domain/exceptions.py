"""도메인 레이어 예외 정의."""


class DomainError(Exception):
    """도메인 레이어 최상위 예외."""


class ConfigurationError(DomainError):
    """자격 증명 누락 또는 수집 대상이 비어 있을 때. 실행 가드를 잡기 전에 발생."""


class AlreadyRunningError(DomainError):
    """다른 수집 실행이 이미 진행 중일 때. 나중에 다시 시도하면 된다."""

    def __init__(self) -> None:
        super().__init__("수집이 이미 진행 중입니다.")


class CollectionError(DomainError):
    """수집 중 발생한 오류."""


class NetworkError(CollectionError):
    """플랫폼 API 요청 실패 (네트워크 오류, 비정상 HTTP 상태)."""

    def __init__(self, message: str, retryable: bool = False):
        self.retryable = retryable
        super().__init__(message)


class ParseError(CollectionError):
    """플랫폼 응답 형식이 예상과 다를 때."""


class PersistenceError(DomainError):
    """저장소 불변식 위반 또는 I/O 실패."""


class StorageError(DomainError):
    """토픽 카탈로그를 읽을 수 없을 때."""
