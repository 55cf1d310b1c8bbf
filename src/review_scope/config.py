"""
Configuration Management

시스템 설정 관리
"""

import os
import yaml
from dataclasses import dataclass
from typing import Optional, Dict, Any
from pathlib import Path
import logging
from logging.handlers import RotatingFileHandler


DEFAULT_MARKER_PREFIX = "AI review completed up to commit:"
DEFAULT_SUMMARY_SEPARATOR = "\n\n---\n\n"


@dataclass
class GitHubConfig:
    """GitHub API 설정"""
    token: Optional[str] = None
    api_base_url: str = "https://api.github.com"
    timeout_seconds: int = 30
    per_page: int = 100
    max_retries: int = 3


@dataclass
class ReviewConfig:
    """리뷰 범위 설정"""
    marker_prefix: str = DEFAULT_MARKER_PREFIX
    summary_separator: str = DEFAULT_SUMMARY_SEPARATOR
    include_extensions: str = ""  # 쉼표로 구분 (예: ".py,.js")
    exclude_extensions: str = ""
    include_paths: str = ""
    exclude_paths: str = ""
    keep_unclassifiable_files: bool = True  # whole PR patch가 없는 파일 유지


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
    github: GitHubConfig
    review: ReviewConfig
    logging: LoggingConfig
    debug: bool = False

    @classmethod
    def from_env(cls) -> "AppConfig":
        """환경 변수에서 설정 로드"""
        return cls(
            github=GitHubConfig(
                token=os.getenv("GITHUB_TOKEN"),
                api_base_url=os.getenv("GITHUB_API_URL", "https://api.github.com"),
                timeout_seconds=int(os.getenv("GITHUB_TIMEOUT", "30")),
                per_page=int(os.getenv("GITHUB_PER_PAGE", "100")),
                max_retries=int(os.getenv("GITHUB_MAX_RETRIES", "3")),
            ),
            review=ReviewConfig(
                marker_prefix=os.getenv("REVIEW_MARKER_PREFIX", DEFAULT_MARKER_PREFIX),
                summary_separator=os.getenv("REVIEW_SUMMARY_SEPARATOR", DEFAULT_SUMMARY_SEPARATOR),
                include_extensions=os.getenv("INCLUDE_EXTENSIONS", ""),
                exclude_extensions=os.getenv("EXCLUDE_EXTENSIONS", ""),
                include_paths=os.getenv("INCLUDE_PATHS", ""),
                exclude_paths=os.getenv("EXCLUDE_PATHS", ""),
                keep_unclassifiable_files=os.getenv("KEEP_UNCLASSIFIABLE_FILES", "true").lower() == "true",
            ),
            logging=LoggingConfig(
                level=os.getenv("LOG_LEVEL", "INFO"),
                format=os.getenv("LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
                file_path=os.getenv("LOG_FILE"),
                max_file_size=int(os.getenv("LOG_MAX_SIZE", str(10 * 1024 * 1024))),
                backup_count=int(os.getenv("LOG_BACKUP_COUNT", "5")),
            ),
            debug=os.getenv("DEBUG", "false").lower() == "true",
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
            review=ReviewConfig(**config_data.get('review', {})),
            logging=LoggingConfig(**config_data.get('logging', {})),
            debug=config_data.get('debug', False),
        )

    def validate(self) -> None:
        """설정 유효성 검사"""
        errors = []

        if not self.github.api_base_url.startswith(("http://", "https://")):
            errors.append(f"Invalid GitHub API URL: {self.github.api_base_url}")

        if self.github.timeout_seconds <= 0:
            errors.append("GitHub timeout must be positive")

        # GitHub 페이지 크기 제한 (1~100)
        if not 1 <= self.github.per_page <= 100:
            errors.append("GitHub page size must be between 1 and 100")

        if self.github.max_retries < 0:
            errors.append("Retry count must be non-negative")

        # 마커 형식 검증
        if not self.review.marker_prefix.strip():
            errors.append("Review marker prefix cannot be empty")

        if not self.review.summary_separator:
            errors.append("Summary separator cannot be empty")

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
                'per_page': self.github.per_page,
                'max_retries': self.github.max_retries,
                # 보안상 토큰은 제외
            },
            'review': {
                'marker_prefix': self.review.marker_prefix,
                'summary_separator': self.review.summary_separator,
                'include_extensions': self.review.include_extensions,
                'exclude_extensions': self.review.exclude_extensions,
                'include_paths': self.review.include_paths,
                'exclude_paths': self.review.exclude_paths,
                'keep_unclassifiable_files': self.review.keep_unclassifiable_files,
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

    def __init__(self, config: Optional[AppConfig] = None):
        self._config = config or AppConfig.from_env()
        self._config.validate()
        self._setup_logging()

    @property
    def config(self) -> AppConfig:
        """현재 설정 반환"""
        return self._config

    def update_config(self, **kwargs) -> None:
        """설정 업데이트"""
        config_dict = self._config.to_dict()
        # to_dict()에서 제외된 토큰 유지
        config_dict['github']['token'] = self._config.github.token

        for key, value in kwargs.items():
            if '.' in key:
                # 중첩된 설정 (예: 'review.include_paths')
                section, field_name = key.split('.', 1)
                if section not in config_dict or not isinstance(config_dict[section], dict):
                    raise KeyError(f"Unknown config section: {section}")
                config_dict[section][field_name] = value
            else:
                config_dict[key] = value

        self._config = AppConfig(
            github=GitHubConfig(**config_dict['github']),
            review=ReviewConfig(**config_dict['review']),
            logging=LoggingConfig(**config_dict['logging']),
            debug=config_dict['debug'],
        )

        self._config.validate()
        self._setup_logging()

    def _setup_logging(self) -> None:
        """로깅 설정"""
        level = logging.DEBUG if self._config.debug else getattr(logging, self._config.logging.level.upper())
        logging.basicConfig(level=level, format=self._config.logging.format)
        logging.getLogger().setLevel(level)

        # 파일 로깅이 설정된 경우 로테이션 설정
        if self._config.logging.file_path:
            root_logger = logging.getLogger()
            already_attached = any(
                isinstance(h, RotatingFileHandler)
                and h.baseFilename == os.path.abspath(self._config.logging.file_path)
                for h in root_logger.handlers
            )
            if not already_attached:
                handler = RotatingFileHandler(
                    self._config.logging.file_path,
                    maxBytes=self._config.logging.max_file_size,
                    backupCount=self._config.logging.backup_count,
                )
                handler.setFormatter(logging.Formatter(self._config.logging.format))
                root_logger.addHandler(handler)


# 전역 설정 관리자 인스턴스 (최초 사용 시 생성)
_config_manager: Optional[ConfigManager] = None


def get_config_manager() -> ConfigManager:
    """전역 설정 관리자 반환"""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def get_config() -> AppConfig:
    """현재 설정 반환"""
    return get_config_manager().config


def update_config(**kwargs) -> None:
    """설정 업데이트"""
    get_config_manager().update_config(**kwargs)
