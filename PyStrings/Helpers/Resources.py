import appdirs # type: ignore

config_dir : str = appdirs.user_config_dir("CiviStrings", "CiviStrings", roaming=True)
