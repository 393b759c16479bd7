import os
import yaml
from pathlib import Path

# Automatically load when module is imported
_DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent.parent / 'config' / 'config.yaml'
CONFIG_PATH = Path(os.environ.get('ECONSTITUCIONAL_CONFIG', _DEFAULT_CONFIG_PATH))

with open(CONFIG_PATH, 'r', encoding='utf-8') as f:
  CONFIG = yaml.safe_load(f)
