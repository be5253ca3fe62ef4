"""
Configuration Management

시스템 설정 관리
"""

import os
import yaml
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, Mapping
from pathlib import Path
import logging


DEFAULT_CONFIGURATION_PATH = ".github/labeler.yml"


def _get_input(env: Mapping[str, str], name: str, default: Optional[str] = None) -> Optional[str]:
    """GitHub Actions 입력값 조회 (INPUT_REPO-TOKEN / INPUT_REPO_TOKEN 모두 허용)"""
    key = f"INPUT_{name.upper()}"
    value = env.get(key)
    if value is None:
        value = env.get(key.replace('-', '_'))
    if value is None or value.strip() == "":
        return default
    return value.strip()


@dataclass
class GitHubConfig:
    """GitHub API 설정"""
    token: Optional[str] = None
    api_base_url: str = "https://api.github.com"
    timeout_seconds: int = 30


@dataclass
class LabelerConfig:
    """라벨러 동작 설정"""
    configuration_path: str = DEFAULT_CONFIGURATION_PATH
    sync_labels: bool = False
    dry_run: bool = False


@dataclass
class LoggingConfig:
    """로깅 설정"""
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file_path: Optional[str] = None
    max_file_size: int = 10 * 1024 * 1024  # 10MB
    backup_count: int = 5


@dataclass
class AppConfig:
    """전체 애플리케이션 설정"""
    github: GitHubConfig = field(default_factory=GitHubConfig)
    labeler: LabelerConfig = field(default_factory=LabelerConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    debug: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AppConfig":
        """환경 변수(Actions 입력 포함)에서 설정 로드"""
        env = os.environ if environ is None else environ
        debug = env.get("RUNNER_DEBUG") == "1" or env.get("DEBUG", "false").lower() == "true"
        return cls(
            github=GitHubConfig(
                token=_get_input(env, "repo-token") or env.get("GITHUB_TOKEN"),
                api_base_url=env.get("GITHUB_API_URL", "https://api.github.com"),
                timeout_seconds=int(env.get("GITHUB_TIMEOUT", "30")),
            ),
            labeler=LabelerConfig(
                configuration_path=_get_input(env, "configuration-path", DEFAULT_CONFIGURATION_PATH),
                # 빈 문자열이 아니면 켜짐
                sync_labels=bool(_get_input(env, "sync-labels")),
                dry_run=env.get("LABELER_DRY_RUN", "false").lower() == "true",
            ),
            logging=LoggingConfig(
                level="DEBUG" if debug else env.get("LOG_LEVEL", "INFO"),
                format=env.get("LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
                file_path=env.get("LOG_FILE"),
                max_file_size=int(env.get("LOG_MAX_SIZE", str(10 * 1024 * 1024))),
                backup_count=int(env.get("LOG_BACKUP_COUNT", "5")),
            ),
            debug=debug,
        )

    @classmethod
    def from_yaml(cls, config_path: str) -> "AppConfig":
        """YAML 파일에서 설정 로드"""
        config_file = Path(config_path)
        if not config_file.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_file, 'r', encoding='utf-8') as f:
            config_data = yaml.safe_load(f) or {}

        return cls(
            github=GitHubConfig(**config_data.get('github', {})),
            labeler=LabelerConfig(**config_data.get('labeler', {})),
            logging=LoggingConfig(**config_data.get('logging', {})),
            debug=config_data.get('debug', False),
        )

    def validate(self, require_token: bool = True) -> None:
        """설정 유효성 검사"""
        errors = []

        # GitHub 토큰 필수 확인
        if require_token and not self.github.token:
            errors.append("GitHub token is required")

        if not self.labeler.configuration_path:
            errors.append("Configuration path must not be empty")

        if self.github.timeout_seconds <= 0:
            errors.append("GitHub timeout must be positive")

        # 로그 레벨 검증
        valid_log_levels = {'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'}
        if self.logging.level.upper() not in valid_log_levels:
            errors.append(f"Invalid log level: {self.logging.level}")

        if errors:
            raise ValueError(f"Configuration validation failed: {'; '.join(errors)}")

    def to_dict(self) -> Dict[str, Any]:
        """설정을 딕셔너리로 변환"""
        return {
            'github': {
                'api_base_url': self.github.api_base_url,
                'timeout_seconds': self.github.timeout_seconds,
                # 보안상 토큰은 제외
            },
            'labeler': {
                'configuration_path': self.labeler.configuration_path,
                'sync_labels': self.labeler.sync_labels,
                'dry_run': self.labeler.dry_run,
            },
            'logging': {
                'level': self.logging.level,
                'format': self.logging.format,
                'file_path': self.logging.file_path,
                'max_file_size': self.logging.max_file_size,
                'backup_count': self.logging.backup_count,
            },
            'debug': self.debug,
        }


class ConfigManager:
    """설정 관리자"""

    def __init__(self, config: Optional[AppConfig] = None, require_token: bool = True):
        self._config = config or AppConfig.from_env()
        self._config.validate(require_token=require_token)
        self._setup_logging()

    @property
    def config(self) -> AppConfig:
        """현재 설정 반환"""
        return self._config

    def _setup_logging(self) -> None:
        """로깅 설정"""
        logging.basicConfig(
            level=getattr(logging, self._config.logging.level.upper()),
            format=self._config.logging.format,
        )

        # 파일 로깅이 설정된 경우 로테이션 설정
        if self._config.logging.file_path:
            from logging.handlers import RotatingFileHandler

            handler = RotatingFileHandler(
                self._config.logging.file_path,
                maxBytes=self._config.logging.max_file_size,
                backupCount=self._config.logging.backup_count,
            )
            handler.setFormatter(logging.Formatter(self._config.logging.format))

            # 루트 로거에 핸들러 추가
            root_logger = logging.getLogger()
            root_logger.addHandler(handler)
