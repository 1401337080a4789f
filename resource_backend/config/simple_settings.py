# _*_ coding: utf-8 _*_
"""Simple Pydantic Settings implementation."""
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """통합 설정 클래스 - Pydantic Settings 방식"""

    model_config = SettingsConfigDict(
        env_file=".env",  # 로컬 개발용 (파일이 없어도 에러 없음)
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application Configuration
    app_version: str = Field(default="1.0.0")
    app_log_level: str = Field(default="info")
    # 개발 환경에서는 500 에러 메시지에 원본 예외 내용을 포함
    app_debug: bool = Field(default=False)
    # 리버스 프록시 환경에서 사용 (Nginx, API Gateway 등)
    app_root_path: str = Field(default="")

    # Server Configuration
    server_host: str = Field(default="0.0.0.0")
    server_port: int = Field(default=8000)
    server_reload: bool = Field(default=False)
    server_log_level: str = Field(default="info")

    # CORS Configuration
    cors_origins: str = Field(default="http://localhost:3000,http://localhost:5173")

    # Logging Configuration
    # ==========================================
    # 로그 파일 저장 여부
    # - True: 로그를 파일에 저장 (온프레미스)
    # - False: stdout으로만 출력 (Kubernetes 권장)
    log_to_file: bool = Field(default=False)
    log_dir: str = Field(default="./logs")
    log_file: str = Field(default="app.log")
    # daily / weekly / monthly / size
    log_rotation: str = Field(default="daily")
    log_retention_days: int = Field(default=30)
    # 에러 로그에 스택 트레이스 포함 여부
    log_include_exc_info: bool = Field(default=True)

    # Database Configuration
    # DATABASE_HOST=sqlite 이면 DATABASE_NAME.db 파일을 사용
    database_host: str = Field(default="localhost")
    database_port: int = Field(default=5432)
    database_name: str = Field(default="resource_db")
    database_username: str = Field(default="postgres")
    database_password: str = Field(default="password")
    database_url_override: Optional[str] = Field(default=None, alias="DATABASE_URL")
    database_echo: bool = Field(default=False)

    # Redis Configuration (평가 집계 분산 락에 사용)
    redis_enabled: bool = Field(default=False)
    redis_host: str = Field(default="localhost")
    redis_port: int = Field(default=6379)
    redis_db: int = Field(default=0)
    redis_password: Optional[str] = Field(default=None)
    # 연결 실패로 프로세스 내부 락을 쓰는 동안 Redis 재연결을 시도하는 간격 (초)
    redis_retry_interval_seconds: float = Field(default=30.0)

    # JWT Configuration
    jwt_enabled: bool = Field(default=True)
    jwt_algorithm: str = Field(default="HS256")
    jwt_secret_key: str = Field(default="change_me")
    jwt_issuer: Optional[str] = Field(default=None)
    jwt_exclude_paths: str = Field(default="/health,/docs,/openapi.json,/redoc")

    # Rating Configuration
    rating_page_size_default: int = Field(default=10)
    rating_page_size_max: int = Field(default=100)
    # 리소스별 집계 락 대기 시간 (초)
    rating_lock_timeout_seconds: float = Field(default=10.0)

    def get_cors_origins(self) -> List[str]:
        """CORS origins를 리스트로 반환"""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    def get_jwt_exclude_paths(self) -> List[str]:
        """JWT 검증 제외 경로 리스트 반환"""
        if not self.jwt_exclude_paths:
            return []
        return [path.strip() for path in self.jwt_exclude_paths.split(",") if path.strip()]

    @property
    def database_url(self) -> str:
        """데이터베이스 URL 생성"""
        if self.database_url_override:
            return self.database_url_override
        if self.database_host == "sqlite":
            return f"sqlite:///{self.database_name}.db"
        return (
            f"postgresql://{self.database_username}:{self.database_password}"
            f"@{self.database_host}:{self.database_port}/{self.database_name}"
        )

    def get_uvicorn_config(self) -> dict:
        """uvicorn 설정 반환"""
        return {
            "host": self.server_host,
            "port": self.server_port,
            "reload": self.server_reload,
            "log_level": self.server_log_level,
        }


# 전역 설정 인스턴스
settings = Settings()
