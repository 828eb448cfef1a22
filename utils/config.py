import os
from configparser import ConfigParser
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from utils.constants import MAXIMUM_CONSTANT, MINIMUM_CONSTANT

if TYPE_CHECKING:
    from configparser import SectionProxy


ROOT_DIR = Path(__file__).parent.parent


class CatalogConfig:
    def __init__(self, section: "SectionProxy") -> None:
        self.__section = section

    @property
    def chart_data(self) -> Path:
        path = Path(self.__section.get("chart_data", fallback="data/chart-data.json"))
        if not path.is_absolute():
            path = ROOT_DIR / path
        return path

    @property
    def minimum_constant(self) -> float:
        return self.__section.getfloat("minimum_constant", fallback=MINIMUM_CONSTANT)

    @property
    def maximum_constant(self) -> float:
        return self.__section.getfloat("maximum_constant", fallback=MAXIMUM_CONSTANT)


class LoggingConfig:
    def __init__(self, section: "SectionProxy") -> None:
        self.__section = section

    @property
    def file(self) -> Optional[str]:
        return self.__section.get("file") or None


class DangerousConfig:
    def __init__(self, section: "SectionProxy") -> None:
        self.__section = section

    @property
    def dev(self) -> bool:
        return self.__section.getboolean("dev", fallback=False)


class Config:
    SECTIONS = ("catalog", "logging", "dangerous")

    def __init__(self, config: "ConfigParser") -> None:
        self.__config = config
        for section in self.SECTIONS:
            if not self.__config.has_section(section):
                self.__config.add_section(section)

        self.catalog = CatalogConfig(self.__config["catalog"])
        self.logging = LoggingConfig(self.__config["logging"])
        self.dangerous = DangerousConfig(self.__config["dangerous"])

    @classmethod
    def from_file(cls, path: "str | Path") -> "Config":
        cfg = ConfigParser()
        # A missing file leaves every section on its defaults.
        cfg.read(path, encoding="utf-8")
        return cls(cfg)


config = Config.from_file(
    os.environ.get("ARCAEA_TOOLBOX_CONFIG", ROOT_DIR / "toolbox.ini")
)
