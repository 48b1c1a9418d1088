"""
This file provides all our needed config support.
"""
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from beanpath.properties import PropertyAccessor, set_property_accessor

CONFIG_FILE_NAME = '.beanpath.yaml'

_known_settings = {
    'create_missing': bool,
    'snake_case_names': bool
}


def _check_content(content: Any):
    """
    A function that verifies that the content read from a configuration file has the
    right shape.

    :param content: the content to check.
    :raises ValueError: if the content is not valid.
    """
    if not isinstance(content, dict):
        raise ValueError('Bad configuration file format: the top level must be a mapping.')
    for key, value in content.items():
        if key not in _known_settings:
            raise ValueError(f'Bad configuration file format: unknown setting "{key}".')
        expected = _known_settings[key]
        if not isinstance(value, expected):
            raise ValueError(f'Bad configuration file format: the "{key}" setting must be a {expected.__name__}.')


class Configuration(object):
    """
    Instances of this class represent the settings that control how bean paths are
    evaluated.
    """
    @classmethod
    def from_file(cls, path: Path) -> 'Configuration':
        """
        This class function creates a configuration object by reading and validating a
        YAML configuration file.  An empty file gives the default configuration.

        :param path: the path to the configuration file to read.
        :return: the resulting configuration object.
        :raises ValueError: if the configuration file cannot be validated.
        """
        with path.open() as fd:
            content = yaml.full_load(fd)
        if content is None:
            content = {}
        _check_content(content)
        return cls(content)

    def __init__(self, source: Optional[Dict[str, Any]] = None):
        """
        A function that creates instances of the ``Configuration`` class.

        :param source: the source dictionary containing the settings.  Any setting not
        present takes its default value.
        """
        source = source or {}
        self._create_missing: bool = source['create_missing'] if 'create_missing' in source else True
        self._snake_case_names: bool = source['snake_case_names'] if 'snake_case_names' in source else True

    @property
    def create_missing(self) -> bool:
        """
        A read-only property that returns whether missing dictionaries and lists should
        be created when a value is written through a path.

        :return: ``True`` if missing containers should be created.
        """
        return self._create_missing

    @property
    def snake_case_names(self) -> bool:
        """
        A read-only property that returns whether a camel case property name should also
        be looked for in its snake case form on objects.

        :return: ``True`` if snake case names should be tried.
        """
        return self._snake_case_names

    def apply(self) -> 'Configuration':
        """
        A function that puts this configuration into effect for property access.

        :return: this object, for fluency.
        """
        set_property_accessor(PropertyAccessor(snake_case_fallback=self._snake_case_names))
        return self

    def __str__(self) -> str:
        return f'Configuration[create_missing={self._create_missing}, snake_case_names={self._snake_case_names}]'


def get_configuration(directory: Path) -> Configuration:
    """
    This function returns the configuration for the given directory.  If the directory
    contains a ``.beanpath.yaml`` file, it is read as the source of the configuration.
    Otherwise, the default configuration is returned.

    :param directory: the directory to look in.
    :return: the appropriate configuration.
    """
    config_file_path = directory / CONFIG_FILE_NAME

    if config_file_path.is_file():
        return Configuration.from_file(config_file_path)

    return Configuration()
