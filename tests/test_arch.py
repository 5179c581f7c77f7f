from pytest_archon import archrule


def test_codecs_do_not_import_hashers() -> None:
    (
        archrule("inspect-is-standalone")
        .match("hashup.inspect*")
        .should_not_import("hashup.hashers*")
        .should_not_import("hashup.registry")
        .should_not_import("hashup.updater")
        .should_not_import("hashup.config")
        .check("hashup")
    )


def test_hashers_do_not_read_config() -> None:
    (
        archrule("hashers-are-configured-by-caller")
        .match("hashup.hashers*")
        .should_not_import("hashup.config")
        .should_not_import("hashup.updater")
        .check("hashup")
    )
