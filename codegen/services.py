import json
import logging
import os
from pydantic import ValidationError

from codegen.entities import GeneratedFile, ProjectConfig
from core.environment.config import Settings
from core.exceptions import ProjectConfigException


class CodegenService:
    """
    Service for project files: reads the project config and writes
    generated artifacts.
    
    Parameters
    ----------
    settings : Settings
        Application settings
    logger : logging.Logger
        Logger instance
    """
    
    def __init__(self, settings: Settings, logger: logging.Logger):
        self.settings = settings
        self.logger = logger
    
    def load_project_config(self, root_dir: str) -> ProjectConfig:
        """
        Load the project configuration artifact.
        
        Parameters
        ----------
        root_dir : str
            Project directory
            
        Returns
        -------
        ProjectConfig
            Networks and sources
            
        Raises
        ------
        ProjectConfigException
            If the file is missing or malformed
        """
        path = os.path.join(root_dir, self.settings.config_filename)
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError as e:
            raise ProjectConfigException(f"Project config not found: {path}") from e
        except UnicodeDecodeError as e:
            raise ProjectConfigException(f"Project config is not valid UTF-8: {path}") from e
        except json.JSONDecodeError as e:
            raise ProjectConfigException(f"Project config is not valid JSON: {path}") from e
        
        try:
            return ProjectConfig.model_validate(data)
        except ValidationError as e:
            error = e.errors()[0]
            location = ".".join(str(x) for x in error["loc"])
            raise ProjectConfigException(f"Invalid project config {path}: {location}: {error['msg']}") from e
    
    def get_schema_path(self, root_dir: str) -> str:
        return os.path.join(root_dir, self.settings.schema_filename)
    
    def write_generated(self, root_dir: str, files: list[GeneratedFile]) -> list[str]:
        """
        Write generated artifacts into the generated directory.
        
        Parameters
        ----------
        root_dir : str
            Project directory
        files : list[GeneratedFile]
            Artifacts to write
            
        Returns
        -------
        list[str]
            Written paths
        """
        generated_dir = os.path.join(root_dir, self.settings.generated_dir)
        os.makedirs(generated_dir, exist_ok=True)
        
        paths = []
        for generated in files:
            path = os.path.join(generated_dir, generated.filename)
            with open(path, "w", encoding="utf-8") as f:
                f.write(generated.content)
            paths.append(path)
            self.logger.debug(f"Wrote {path}")
        
        return paths
