# envforge:header:start
#
#   project      : EnvForge
#   file         : constants.py
#   file_relpath : src/envforge/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# envforge:header:end

"""EnvForge Constants."""

from __future__ import annotations

# Input layout below the input root:
ENVIRONMENTS_DIR_NAME: str = "environments"
APPS_DIR_NAME: str = "apps"
VARS_DIR_NAME: str = "vars"

SCRIPT_SUFFIX: str = ".conf"
OUTPUT_SUFFIX: str = ".json"

# Optional output settings file at the input root:
CONFIG_FILE_NAME: str = "envforge.toml"

# Names bound inside every script scope:
IMPORT_BINDING_NAME: str = "vars"
ENV_BINDING_NAME: str = "env"
ENV_NAME_FIELD: str = "name"

DEFAULT_INDENT: int = 2

# Highest index an array-shaped table may use; larger ones are conversion errors:
MAX_ARRAY_INDEX: int = 1_000_000

LOG_LEVEL_ENV_VAR: str = "ENVFORGE_LOG_LEVEL"
