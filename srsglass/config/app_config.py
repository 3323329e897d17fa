#!filepath: srsglass/config/app_config.py
import yaml
from pydantic import BaseModel, Field, ValidationError
from dotenv import load_dotenv
import os

from srsglass.utils.errors import UserInputError

from .log_config import LogConfig
from .dump_config import DumpConfig
from .update_config import UpdateConfig
from .output_config import OutputConfig
from .secret_config import SecretConfig


def config_dir() -> str:
    """
    返回打包配置所在目录:
    srsglass/config/app_config.py → srsglass/config
    """
    return os.path.abspath(os.path.dirname(__file__))


class AppConfig(BaseModel):
    log: LogConfig = Field(default_factory=LogConfig)
    dump: DumpConfig = Field(default_factory=DumpConfig)
    update: UpdateConfig = Field(default_factory=UpdateConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    secret: SecretConfig = Field(default_factory=SecretConfig)

    @classmethod
    def load(cls, path: str | None = None) -> "AppConfig":
        """
        加载 YAML 配置 + .env
        - 默认使用 srsglass/config/base.yml
        - .env 从当前工作目录读取
        - 文件缺失 / YAML 错误 / 字段非法 → UserInputError（原异常保留为 __cause__）
        """
        # 1) 先加载 .env
        load_dotenv(os.path.join(os.getcwd(), ".env"))

        # 2) 决定配置文件路径
        if path is None:
            path = os.path.join(config_dir(), "base.yml")

        if not os.path.exists(path):
            raise UserInputError(f"config file not found: {path}")

        # 3) 读取 YAML，并从 env 注入 secret
        try:
            with open(path, "r", encoding="utf-8") as f:
                raw = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise UserInputError(f"cannot read config file {path}: {e}") from e

        if not isinstance(raw, dict):
            raise UserInputError(f"config file {path} must contain a mapping")

        raw["secret"] = {
            "user_nation": os.getenv("SRSGLASS_NATION", ""),
        }

        try:
            return cls(**raw)
        except ValidationError as e:
            raise UserInputError(f"invalid config file {path}: {e}") from e
