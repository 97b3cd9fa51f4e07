import os
from dotenv import load_dotenv

load_dotenv()


def _env_flag(name, default=False):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production'
    MAX_CONTENT_LENGTH = int(os.environ.get('MAX_CONTENT_LENGTH', 10 * 1024 * 1024))  # 10MB schema documents

    # Code First mapping generation
    CODEGEN_NAMESPACE = os.environ.get('CODEGEN_NAMESPACE', 'Domain')
    CODEGEN_DEFAULT_SCHEMA_OWNER = os.environ.get('CODEGEN_DEFAULT_SCHEMA_OWNER', 'dbo')
    CODEGEN_USE_FK_ID_PROPERTIES = _env_flag('CODEGEN_USE_FK_ID_PROPERTIES')
    CODEGEN_MAX_WORKERS = int(os.environ.get('CODEGEN_MAX_WORKERS', 1))
