"""
    Copyright 2026 Inmanta

    Licensed under the Apache License, Version 2.0 (the "License");
    you may not use this file except in compliance with the License.
    You may obtain a copy of the License at

        http://www.apache.org/licenses/LICENSE-2.0

    Unless required by applicable law or agreed to in writing, software
    distributed under the License is distributed on an "AS IS" BASIS,
    WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
    See the License for the specific language governing permissions and
    limitations under the License.

    Contact: code@inmanta.com
"""

import logging
import os
from collections import defaultdict
from configparser import ConfigParser, Interpolation
from typing import Callable, Dict, Generic, List, Optional, TypeVar, Union, overload

LOGGER = logging.getLogger(__name__)


def _normalize_name(name: str) -> str:
    return name.replace("_", "-")


def _get_from_env(section: str, name: str) -> Optional[str]:
    return os.environ.get(f"TYPEDECL_{section}_{name}".replace("-", "_").upper(), default=None)


class LenientConfigParser(ConfigParser):
    def optionxform(self, name: str) -> str:
        name = _normalize_name(name)
        return super(LenientConfigParser, self).optionxform(name)


class Config(object):
    __instance: Optional[ConfigParser] = None
    __config_definition: Dict[str, Dict[str, "Option"]] = defaultdict(lambda: {})

    @classmethod
    def load_config(
        cls,
        config_file: Optional[str] = None,
        main_cfg_file: str = "/etc/typedecl/typedecl.cfg",
    ) -> None:
        """
        Load the configuration file
        """
        local_cfg_files: List[str] = [os.path.expanduser("~/.typedecl.cfg"), ".typedecl.cfg"]

        # Files with a higher index in the list, override config options defined by files with a lower index
        files: List[str] = [main_cfg_file] + local_cfg_files
        if config_file is not None:
            files.append(config_file)

        config = LenientConfigParser(interpolation=Interpolation())
        loaded: List[str] = config.read(files)
        LOGGER.debug("Loaded configuration from %s", loaded)
        cls.__instance = config

    @classmethod
    def _get_instance(cls) -> ConfigParser:
        if cls.__instance is None:
            cls.load_config()

        return cls.__instance

    @classmethod
    def _reset(cls) -> None:
        cls.__instance = None

    @overload
    @classmethod
    def get(cls) -> ConfigParser:
        ...

    @overload
    @classmethod
    def get(cls, section: str, name: str, default_value: Optional[str] = None) -> Optional[str]:
        ...

    @classmethod
    def get(
        cls, section: Optional[str] = None, name: Optional[str] = None, default_value: Optional[str] = None
    ) -> Union[str, ConfigParser]:
        """
        Get the entire config or get a value directly
        """
        cfg = cls._get_instance()
        if section is None:
            return cfg

        assert name is not None
        name = _normalize_name(name)

        opt = cls.validate_option_request(section, name)

        val = _get_from_env(section, name)
        if val is not None:
            LOGGER.debug(f"Setting {section}:{name} was set using an environment variable")
        else:
            val = cfg.get(section, name, fallback=default_value)

        if not opt:
            return val
        return opt.validate(val)

    @classmethod
    def set(cls, section: str, name: str, value: str) -> None:
        """
        Override a value
        """
        name = _normalize_name(name)

        if section not in cls._get_instance():
            cls._get_instance().add_section(section)
        cls._get_instance().set(section, name, value)

    @classmethod
    def register_option(cls, option: "Option") -> None:
        cls.__config_definition[option.section][option.name] = option

    @classmethod
    def validate_option_request(cls, section: str, name: str) -> Optional["Option"]:
        if section not in cls.__config_definition:
            LOGGER.warning("Config section %s not defined" % (section))
            return None
        if name not in cls.__config_definition[section]:
            LOGGER.warning("Config name %s not defined in section %s" % (name, section))
            return None
        return cls.__config_definition[section][name]


def is_list(value: Union[str, List[str]]) -> List[str]:
    """List of comma-separated values"""
    if isinstance(value, list):
        return value
    return [] if value == "" else [x.strip() for x in value.split(",")]


def is_positive_int(value: Union[int, str]) -> int:
    """positive int"""
    result = int(value)
    if result < 1:
        raise ValueError("%d is not a positive integer" % result)
    return result


T = TypeVar("T")


class Option(Generic[T]):
    """
    A config option, registered with :py:class:`Config` when it is created. Options are declared at module level.
    The environment variable `TYPEDECL_<SECTION>_<NAME>` takes precedence over the config files.

    :param section: section in the config file
    :param name: name of the option, underscores and dashes are interchangeable
    :param default: the value used when the option is set nowhere
    :param documentation: the documentation for this option
    :param validator: converts the string representation of the option into its value, raises ValueError when the
        value is invalid
    """

    def __init__(
        self,
        section: str,
        name: str,
        default: T,
        documentation: str,
        validator: Callable[[str], T],
    ) -> None:
        self.section = section
        self.name = _normalize_name(name)
        self.validator = validator
        self.documentation = documentation
        self.default = default
        Config.register_option(self)

    def get(self) -> T:
        out = _get_from_env(self.section, self.name)
        if out is None:
            cfg = Config._get_instance()
            out = cfg.get(self.section, self.name, fallback=self.default)
        return self.validate(out)

    def validate(self, value: str) -> T:
        return self.validator(value)

    def set(self, value: str) -> None:
        """Only for tests"""
        Config.set(self.section, self.name, value)


#############################
# Parser
#############################
parser_max_nesting_depth = Option(
    "parser",
    "max-nesting-depth",
    64,
    "The maximum depth of nested list, map, record and union expressions in a single type declaration",
    is_positive_int,
)

#############################
# Registry
#############################
registry_builtin_types = Option(
    "registry",
    "builtin-types",
    "any,null,bool,int,float,string",
    "The builtin primitive types that are registered in every new type registry",
    is_list,
)
