"""
Configuration management for the OzBargain Deal Notifier.

Settings come from the process environment (optionally seeded from a
``.env`` file) and an optional YAML file. The YAML file may reference
environment variables as ``${VAR_NAME}``.
"""

import os
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml
from dotenv import load_dotenv

from ..models.config import Configuration, FeedConfig, JobConfig, TriggerConfig
from ..models.embed import NotificationMode
from ..utils.logging import get_logger

OZB_API = "https://www.ozbargain.com.au/ozbapi/block"

DEFAULT_PORT = 8080

DEFAULT_JOBS: List[Dict[str, Any]] = [
    {
        "name": "top_deals",
        "trigger": {"type": "daily", "hour": 9, "minute": 0},
        "feeds": [
            {
                "category": "Computing Top Deals",
                "url": f"{OZB_API}/ozbdeal_top?dur=30&tid=12",
                "mode": "detail",
            },
            {
                "category": "Electronics Top Deals",
                "url": f"{OZB_API}/ozbdeal_top?dur=30&tid=13",
                "mode": "detail",
            },
        ],
    },
    {
        "name": "new_deals",
        "trigger": {"type": "interval", "hours": 6},
        "feeds": [
            {
                "category": "Computing New Deals",
                "url": f"{OZB_API}/ozbdeal_new?tid=12&f=1",
                "mode": "table",
            },
            {
                "category": "Electronics New Deals",
                "url": f"{OZB_API}/ozbdeal_new?tid=13&f=1",
                "mode": "table",
            },
        ],
    },
]

CONFIG_SEARCH_PATHS = [
    "config/config.yaml",
    "config/config.yml",
    "config.yaml",
    "config.yml",
]


class ConfigurationManager:
    """Loads and validates the system configuration."""

    def __init__(
        self,
        config_path: Optional[str] = None,
        environ: Optional[Mapping[str, str]] = None,
        env_file: Optional[str] = ".env",
    ):
        """
        Initialize the configuration manager.

        Args:
            config_path: YAML file to read. If None, CONFIG_PATH or the
                standard locations are tried, and a missing file is fine.
            environ: Environment to read; os.environ by default
            env_file: ``.env`` file loaded into os.environ when environ is
                not given; None to skip
        """
        self.config_path = config_path
        self.environ = environ
        self.env_file = env_file
        self._config: Optional[Configuration] = None
        self.logger = get_logger("config_manager")

    def _env(self) -> Mapping[str, str]:
        return os.environ if self.environ is None else self.environ

    def _load_env_file(self) -> None:
        if self.environ is not None or not self.env_file:
            return

        if not load_dotenv(self.env_file):
            self.logger.info(f"No environment file loaded from {self.env_file}")

    def _find_config_file(self) -> Optional[str]:
        """Find the configuration file, or None if there is none."""
        if self.config_path:
            return self.config_path

        env_path = self._env().get("CONFIG_PATH")
        if env_path:
            return env_path

        for path in CONFIG_SEARCH_PATHS:
            if os.path.exists(path):
                return path

        return None

    def load_config(self) -> Configuration:
        """
        Load configuration from the environment and the YAML file.

        Returns:
            Configuration object with validated settings.

        Raises:
            ValueError: If configuration is invalid or the file cannot be read.
            FileNotFoundError: If an explicitly named file doesn't exist.
        """
        self._load_env_file()

        raw_config: Dict[str, Any] = {}
        path = self._find_config_file()
        if path is not None:
            raw_config = self._read_file(path)

        try:
            config = self._parse_config(raw_config)
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Error parsing configuration: {e}") from e

        config.validate()

        if not config.webhook_url:
            self.logger.warning(
                "DISCORD_WEBHOOK_URL is not set; deal notifications will fail"
            )

        self._config = config
        return config

    def _read_file(self, path: str) -> Dict[str, Any]:
        if not os.path.exists(path):
            raise FileNotFoundError(f"Configuration file not found: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                raw_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in configuration file: {e}") from e

        if not isinstance(raw_config, dict):
            raise ValueError("Configuration file must contain a mapping")

        self.logger.info(f"Loaded configuration file {Path(path)}")
        return self._expand_env_vars(raw_config)

    def _expand_env_vars(self, obj: Any) -> Any:
        """Recursively expand environment variables in configuration."""
        if isinstance(obj, dict):
            return {key: self._expand_env_vars(value) for key, value in obj.items()}
        elif isinstance(obj, list):
            return [self._expand_env_vars(item) for item in obj]
        elif isinstance(obj, str):
            # Expand ${VAR_NAME} patterns
            if obj.startswith("${") and obj.endswith("}"):
                var_name = obj[2:-1]
                env_value = self._env().get(var_name)
                if env_value is None:
                    raise ValueError(f"Environment variable '{var_name}' not found")
                return env_value
            return obj
        else:
            return obj

    def _parse_config(self, raw_config: Dict[str, Any]) -> Configuration:
        """Merge file settings over environment settings."""
        env = self._env()
        server_data = raw_config.get("server", {}) or {}
        logging_data = raw_config.get("logging", {}) or {}
        http_data = raw_config.get("http", {}) or {}
        schedule_data = raw_config.get("schedule", {}) or {}

        port = server_data.get("port", env.get("PORT") or DEFAULT_PORT)
        timeout = http_data.get("timeout", env.get("REQUEST_TIMEOUT"))

        return Configuration(
            webhook_url=raw_config.get("webhook_url", env.get("DISCORD_WEBHOOK_URL")),
            jobs=self._parse_jobs(raw_config.get("jobs", DEFAULT_JOBS)),
            port=int(port),
            host=server_data.get("host", env.get("HOST", "0.0.0.0")),
            log_level=logging_data.get("level", env.get("LOG_LEVEL", "INFO")),
            log_dir=logging_data.get("dir", env.get("LOG_DIR", "logs")),
            request_timeout=float(timeout) if timeout not in (None, "") else None,
            user_agent=http_data.get("user_agent", "OzBargain-Deal-Notifier/1.0"),
            timezone=schedule_data.get("timezone", env.get("SCHEDULE_TIMEZONE") or None),
        )

    def _parse_jobs(self, jobs_data: List[Dict[str, Any]]) -> List[JobConfig]:
        jobs = []
        for job_data in jobs_data:
            trigger_data = job_data["trigger"]
            trigger = TriggerConfig(
                type=trigger_data["type"],
                hour=int(trigger_data.get("hour", 0)),
                minute=int(trigger_data.get("minute", 0)),
                hours=int(trigger_data.get("hours", 0)),
            )
            feeds = [
                FeedConfig(
                    category=feed_data["category"],
                    url=feed_data["url"],
                    mode=NotificationMode(feed_data.get("mode", "detail")),
                )
                for feed_data in job_data.get("feeds", [])
            ]
            jobs.append(
                JobConfig(
                    name=job_data["name"],
                    trigger=trigger,
                    feeds=feeds,
                    run_on_startup=bool(job_data.get("run_on_startup", True)),
                )
            )
        return jobs

    def get_config(self) -> Configuration:
        """Get current configuration, loading if necessary."""
        if self._config is None:
            return self.load_config()
        return self._config
