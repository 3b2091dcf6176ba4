import ast
from configparser import ConfigParser, MissingSectionHeaderError, NoSectionError
from pathlib import Path
from typing import Any, Dict, Generator, Union

from .functions import get_safe_path


class Settings:
    """
    Settings are thin interface with the configparser within python. Conceptually it's a
    dictionary of dictionaries. The first dictionary key are called sections, and the sub-
    section are attributes. The offset defaults live in the `offset` section.

    Reading/writing and deleting are performed on the config_dict which stores a set of values
    these are loaded during the `read_configuration` step and are committed to disk when
    `write_configuration` is called.
    """

    def __init__(self, directory, filename, ignore_settings=False):
        self._config_file = Path(get_safe_path(directory, create=True)).joinpath(
            filename
        )
        self._config_dict = {}
        if not ignore_settings:
            self.read_configuration()

    def __contains__(self, item):
        return item in self._config_dict

    @property
    def config_file(self):
        return self._config_file

    def read_configuration(self, targetfile=None):
        """
        Read configuration reads the self._config_file to get the parsed config file data.

        Unreadable or missing files leave the settings untouched.
        """
        if targetfile is None:
            targetfile = self._config_file
        try:
            parser = ConfigParser()
            parser.read(targetfile, encoding="utf-8")
            for section in parser.sections():
                for option in parser.options(section):
                    try:
                        config_section = self._config_dict[section]
                    except KeyError:
                        config_section = dict()
                        self._config_dict[section] = config_section
                    config_section[option] = parser.get(section, option)
        except (
            PermissionError,
            NoSectionError,
            MissingSectionHeaderError,
            FileNotFoundError,
        ):
            return

    def write_configuration(self, targetfile=None):
        """
        Write configuration writes the config file to disk.

        This uses the python ConfigParser to save data from the _config_dict.
        """
        if targetfile is None:
            targetfile = self._config_file
        try:
            parser = ConfigParser()
            for section_key in self._config_dict:
                section = self._config_dict[section_key]
                for key in section:
                    value = section[key]
                    if "%" in value:
                        value = value.replace("%", "%%")
                    try:
                        parser.set(section_key, key, value)
                    except NoSectionError:
                        parser.add_section(section_key)
                        parser.set(section_key, key, value)
            with open(targetfile, "w", encoding="utf-8") as fp:
                parser.write(fp)
        except (PermissionError, FileNotFoundError):
            return

    def literal_dict(self):
        literal_dict = dict()
        for section in self._config_dict:
            section_dict = self._config_dict[section]
            literal_section_dict = dict()
            literal_dict[section] = literal_section_dict
            for key in section_dict:
                value = section_dict[key]
                try:
                    value = ast.literal_eval(value)
                except (ValueError, SyntaxError):
                    pass
                literal_section_dict[key] = value
        return literal_dict

    def set_dict(self, literal_dict):
        self._config_dict.clear()
        for section in literal_dict:
            section_dict = dict()
            self._config_dict[section] = section_dict
            for key in literal_dict[section]:
                section_dict[key] = str(literal_dict[section][key])

    def read_persistent(
        self,
        t: type,
        section: str,
        key: str,
        default: Union[str, int, float, bool, list, tuple] = None,
    ) -> Any:
        """
        Directly read from persistent storage the value of an item.

        @param t: datatype.
        @param section: storing section
        @param key: reference item
        @param default: default value if item does not exist or does not convert.
        @return: value
        """
        try:
            value = self._config_dict[section][key]
            if t == bool:
                return value == "True"
            elif t in (list, tuple):
                try:
                    return t(ast.literal_eval(value))
                except (ValueError, SyntaxError, TypeError):
                    return default
            return t(value)
        except (KeyError, ValueError):
            return default

    def read_persistent_string_dict(self, section: str) -> Dict:
        """
        Returns the raw string values of the given section.
        """
        return {k: self._config_dict[section][k] for k in self.keylist(section)}

    def write_persistent(
        self, section: str, key: str, value: Union[str, int, float, bool, list, tuple]
    ):
        """
        Directly write the value to persistent storage.

        @param section: section to write key value
        @param key: The item key being written
        @param value: the value of the item.
        """
        try:
            config_section = self._config_dict[section]
        except KeyError:
            config_section = dict()
            self._config_dict[section] = config_section

        if isinstance(value, (str, int, float, bool, list, tuple)):
            config_section[str(key)] = str(value)

    def delete_persistent(self, section: str, key: str):
        """
        Deletes a key within a section of the persistent settings.
        """
        try:
            del self._config_dict[section][key]
        except KeyError:
            pass

    def clear_persistent(self, section: str):
        self._config_dict.pop(section, None)

    def keylist(self, section: str) -> Generator[str, None, None]:
        """
        Get all keys located at the given section.
        """
        try:
            yield from self._config_dict[section]
        except KeyError:
            return
