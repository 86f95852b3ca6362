"""Shared test fixtures for Class Insight tests."""

import pytest

from class_insight.facts.models import ClassFact, MethodFact, NodeKind, PropertyFact


def pytest_addoption(parser):
    """Add --run-slow option for slow tests."""
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="run slow tests",
    )


def pytest_configure(config):
    """Configure slow marker."""
    config.addinivalue_line("markers", "slow: mark test as slow to run")


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --run-slow is given."""
    if config.getoption("--run-slow"):
        return
    skip_slow = pytest.mark.skip(reason="need --run-slow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


@pytest.fixture
def make_method():
    """Factory for MethodFact with list-friendly arguments."""

    def _make(
        name,
        props=(),
        flow=(),
        params=(),
        returns="",
        calls=(),
        types=(),
    ):
        return MethodFact(
            name=name,
            parameter_types=tuple(params),
            return_type=returns,
            referenced_properties=frozenset(props),
            control_flow=tuple(flow),
            invocations=tuple(calls),
            referenced_types=tuple(types),
        )

    return _make


@pytest.fixture
def make_fact():
    """Factory for ClassFact.

    ``properties`` accepts names, ``(name, type)`` or ``(name, type, mutable)``.
    """

    def _make(
        name,
        package="",
        properties=(),
        methods=(),
        imports=(),
        supertype=None,
        interfaces=(),
        kind=NodeKind.CLASS,
        annotations=(),
        modifiers=(),
        file_name=None,
    ):
        props = []
        for prop in properties:
            if isinstance(prop, str):
                props.append(PropertyFact(prop))
            else:
                props.append(PropertyFact(*prop))
        path = package.replace(".", "/")
        return ClassFact(
            class_name=name,
            file_name=file_name or (f"{path}/{name}.kt" if path else f"{name}.kt"),
            package_name=package,
            language="kotlin",
            kind=kind,
            supertype=supertype,
            interfaces=tuple(interfaces),
            properties=tuple(props),
            methods=tuple(methods),
            imports=tuple(imports),
            annotations=tuple(annotations),
            modifiers=frozenset(modifiers),
        )

    return _make


@pytest.fixture
def user_domain(make_fact, make_method):
    """User (domain) and UserService (application) using it."""
    user = make_fact(
        "User",
        package="domain",
        properties=[("id", "Long"), ("email", "String")],
    )
    service = make_fact(
        "UserService",
        package="application",
        imports=["domain.User"],
        methods=[make_method("register", params=["User"], returns="Unit")],
    )
    return [user, service]
