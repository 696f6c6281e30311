import logging
import os
from typing import Optional

from pydantic import BaseModel

LOG_FORMAT = "[%(levelname)s] %(name)s: %(message)s"


class Settings(BaseModel):
    """
    Parâmetros do interpretador e do servidor. Cada campo pode ser
    sobrescrito por uma variável de ambiente BASIC_<NOME>.
    """
    max_steps: int = 100000
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False
    log_level: str = "WARNING"


def load_settings(environ=None) -> Settings:
    environ = os.environ if environ is None else environ
    values = {}
    for field in Settings.model_fields:
        key = f"BASIC_{field.upper()}"
        if key in environ:
            values[field] = environ[key]
    return Settings(**values)


def configure_logging(level: Optional[str] = None):
    """Configura o logging da raiz; chamado apenas pelos pontos de entrada."""
    if level is None:
        level = load_settings().log_level
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
