import pytest

from capreg import (
    DiscoveryError,
    DuplicateNameError,
    ErrorCategory,
    InvalidPluginError,
    NotFoundError,
    RegistryError,
    RegistryFrozenError,
)


@pytest.mark.parametrize(
    "error_cls, category",
    [
        (NotFoundError, ErrorCategory.NOT_FOUND),
        (DuplicateNameError, ErrorCategory.DUPLICATE),
        (InvalidPluginError, ErrorCategory.INVALID_PLUGIN),
        (RegistryFrozenError, ErrorCategory.FROZEN),
        (DiscoveryError, ErrorCategory.DISCOVERY),
    ],
)
def test_error_categories(error_cls, category):
    err = error_cls(message="boom")
    assert isinstance(err, RegistryError)
    assert err.category == category


def test_error_str_includes_category():
    err = NotFoundError(message="No plugin registered under 'x'", name="x")
    assert str(err) == "not_found: No plugin registered under 'x'"


def test_errors_are_catchable_as_registry_error():
    with pytest.raises(RegistryError):
        raise DuplicateNameError(message="taken", name="acme_bank")


def test_discovery_error_keeps_reference():
    err = DiscoveryError(message="cannot import", reference="missing.module:Thing")
    assert err.reference == "missing.module:Thing"
    assert err.name is None
