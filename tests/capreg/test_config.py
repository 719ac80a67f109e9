import pytest

from capreg import DuplicatePolicy, RegistrySettings


def test_defaults(clean_env):
    settings = RegistrySettings.from_env()

    assert settings.duplicate_policy == DuplicatePolicy.ERROR
    assert settings.freeze is True
    assert settings.plugins_file is None
    assert settings.log_level == "INFO"
    assert settings.json_logs is False


def test_reads_environment(clean_env):
    clean_env.setenv("CAPREG_DUPLICATE_POLICY", "Replace")
    clean_env.setenv("CAPREG_FREEZE", "no")
    clean_env.setenv("CAPREG_PLUGINS_FILE", " plugins.yaml ")
    clean_env.setenv("CAPREG_LOG_LEVEL", "debug")
    clean_env.setenv("CAPREG_JSON_LOGS", "1")

    settings = RegistrySettings.from_env()

    assert settings.duplicate_policy == DuplicatePolicy.REPLACE
    assert settings.freeze is False
    assert settings.plugins_file == "plugins.yaml"
    assert settings.log_level == "DEBUG"
    assert settings.json_logs is True


def test_unrecognized_bool_falls_back_to_default(clean_env):
    clean_env.setenv("CAPREG_FREEZE", "maybe")

    assert RegistrySettings.from_env().freeze is True


def test_empty_plugins_file_is_none(clean_env):
    clean_env.setenv("CAPREG_PLUGINS_FILE", "   ")

    assert RegistrySettings.from_env().plugins_file is None


def test_invalid_duplicate_policy(clean_env):
    clean_env.setenv("CAPREG_DUPLICATE_POLICY", "ignore")

    with pytest.raises(ValueError, match="CAPREG_DUPLICATE_POLICY"):
        RegistrySettings.from_env()
