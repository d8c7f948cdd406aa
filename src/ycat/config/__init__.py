from ycat.config.class_map import load_class_map
from ycat.config.loader import load_project_config, project_config_to_dict
from ycat.config.models import ProjectConfig

__all__ = [
    "ProjectConfig",
    "load_class_map",
    "load_project_config",
    "project_config_to_dict",
]
