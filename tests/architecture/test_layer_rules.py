"""Tests for layer inference, layer rules and pattern classification."""

import pytest

from class_insight.architecture.layers import (
    determine_architecture_pattern,
    infer_layer,
    is_inward,
    is_valid_layer_dependency,
    package_segments,
)
from class_insight.architecture.models import (
    ArchitectureLayer,
    ArchitecturePattern,
    LayerDependency,
    LayerType,
)


def _layer(layer_type, *packages):
    return ArchitectureLayer(
        name=layer_type.value, type=layer_type, packages=packages, level=layer_type.level
    )


def _dep(source, target, count=1):
    return LayerDependency(source, target, count, is_valid_layer_dependency(source, target))


class TestInferLayer:
    @pytest.mark.parametrize(
        "package,class_name,expected",
        [
            ("com.shop.web", "OrderPage", LayerType.PRESENTATION),
            ("com.shop.controllers", "Orders", LayerType.PRESENTATION),
            ("com.shop.application", "PlaceOrder", LayerType.APPLICATION),
            ("com.shop.ports", "OrderStore", LayerType.APPLICATION),
            ("com.shop.domain", "Order", LayerType.DOMAIN),
            ("com.shop.model", "Order", LayerType.DOMAIN),
            ("com.shop.persistence", "OrderRecord", LayerType.DATA),
            ("com.shop.infra", "Clock", LayerType.INFRASTRUCTURE),
            ("com.shop.adapters", "SqlOrderStore", LayerType.INFRASTRUCTURE),
        ],
    )
    def test_package_segments(self, package, class_name, expected):
        assert infer_layer(package, class_name) is expected

    @pytest.mark.parametrize(
        "class_name,expected",
        [
            ("OrderController", LayerType.PRESENTATION),
            ("OrderService", LayerType.APPLICATION),
            ("OrderRepository", LayerType.DATA),
            ("OrderDao", LayerType.DATA),
            ("OrderEntity", LayerType.DOMAIN),
            ("DatabaseConfig", LayerType.INFRASTRUCTURE),
        ],
    )
    def test_class_suffixes(self, class_name, expected):
        assert infer_layer("com.shop", class_name) is expected

    def test_package_beats_class_name(self):
        assert infer_layer("com.shop.domain", "PricingService") is LayerType.DOMAIN

    def test_segments_match_whole_words(self):
        # "webhooks" is not "web", "domainevents" is not "domain"
        assert infer_layer("com.webhooks", "Hook") is None
        assert infer_layer("com.domainevents", "Hook") is None

    def test_path_style_package(self):
        assert infer_layer("src/main/Domain", "Order") is LayerType.DOMAIN

    def test_unknown(self):
        assert infer_layer("", "Widget") is None

    def test_package_segments(self):
        assert package_segments("com.Shop/Domain") == ["com", "shop", "domain"]
        assert package_segments("") == []


class TestLayerRules:
    def test_domain_must_not_depend_on_application(self):
        assert not is_valid_layer_dependency(LayerType.DOMAIN, LayerType.APPLICATION)

    def test_application_may_depend_on_domain(self):
        assert is_valid_layer_dependency(LayerType.APPLICATION, LayerType.DOMAIN)

    @pytest.mark.parametrize(
        "source,target",
        [
            (LayerType.PRESENTATION, LayerType.APPLICATION),
            (LayerType.PRESENTATION, LayerType.DOMAIN),
            (LayerType.APPLICATION, LayerType.DATA),
            (LayerType.DATA, LayerType.DOMAIN),
            (LayerType.DOMAIN, LayerType.INFRASTRUCTURE),
            (LayerType.INFRASTRUCTURE, LayerType.PRESENTATION),
        ],
    )
    def test_allowed(self, source, target):
        assert is_valid_layer_dependency(source, target)

    @pytest.mark.parametrize(
        "source,target",
        [
            (LayerType.PRESENTATION, LayerType.DATA),
            (LayerType.DOMAIN, LayerType.PRESENTATION),
            (LayerType.DOMAIN, LayerType.DATA),
            (LayerType.DATA, LayerType.APPLICATION),
            (LayerType.DATA, LayerType.PRESENTATION),
        ],
    )
    def test_forbidden(self, source, target):
        assert not is_valid_layer_dependency(source, target)

    def test_same_layer_and_unknown_are_valid(self):
        assert is_valid_layer_dependency(LayerType.DOMAIN, LayerType.DOMAIN)
        assert is_valid_layer_dependency(LayerType.UNKNOWN, LayerType.DOMAIN)
        assert is_valid_layer_dependency(LayerType.DOMAIN, None)

    def test_accepts_strings(self):
        assert not is_valid_layer_dependency("domain", "application")
        assert is_valid_layer_dependency("application", "domain")
        assert is_valid_layer_dependency("nonsense", "domain")

    def test_inward(self):
        assert is_inward(LayerType.APPLICATION, LayerType.DOMAIN)
        assert is_inward(LayerType.INFRASTRUCTURE, LayerType.APPLICATION)
        assert not is_inward(LayerType.DOMAIN, LayerType.INFRASTRUCTURE)
        assert not is_inward(LayerType.UNKNOWN, LayerType.DOMAIN)


class TestLayerType:
    def test_parse(self):
        assert LayerType.parse("Domain") is LayerType.DOMAIN
        assert LayerType.parse(None) is LayerType.UNKNOWN
        assert LayerType.parse("bogus") is LayerType.UNKNOWN
        assert LayerType.parse(LayerType.DATA) is LayerType.DATA

    def test_levels(self):
        assert LayerType.PRESENTATION.level < LayerType.APPLICATION.level < LayerType.DOMAIN.level
        assert LayerType.UNKNOWN.level == 0


class TestArchitecturePattern:
    def test_empty_is_unknown(self):
        assert determine_architecture_pattern([], []) is ArchitecturePattern.UNKNOWN

    def test_single_layer_is_unknown(self):
        layers = [_layer(LayerType.DOMAIN, "shop.domain")]
        assert determine_architecture_pattern(layers, []) is ArchitecturePattern.UNKNOWN

    def test_layered(self):
        layers = [
            _layer(LayerType.PRESENTATION, "shop.web"),
            _layer(LayerType.APPLICATION, "shop.application"),
            _layer(LayerType.DOMAIN, "shop.domain"),
        ]
        deps = [
            _dep(LayerType.PRESENTATION, LayerType.APPLICATION),
            _dep(LayerType.APPLICATION, LayerType.DOMAIN),
        ]
        assert determine_architecture_pattern(layers, deps) is ArchitecturePattern.LAYERED

    def test_hexagonal(self):
        layers = [
            _layer(LayerType.DOMAIN, "shop.domain"),
            _layer(LayerType.APPLICATION, "shop.ports"),
            _layer(LayerType.INFRASTRUCTURE, "shop.adapters"),
        ]
        assert determine_architecture_pattern(layers, []) is ArchitecturePattern.HEXAGONAL

    def test_clean(self):
        layers = [
            _layer(LayerType.DOMAIN, "shop.domain"),
            _layer(LayerType.APPLICATION, "shop.application"),
            _layer(LayerType.INFRASTRUCTURE, "shop.infra"),
        ]
        deps = [
            _dep(LayerType.APPLICATION, LayerType.DOMAIN, 4),
            _dep(LayerType.INFRASTRUCTURE, LayerType.APPLICATION, 2),
        ]
        assert determine_architecture_pattern(layers, deps) is ArchitecturePattern.CLEAN

    def test_onion(self):
        layers = [
            _layer(LayerType.DOMAIN, "shop.domain"),
            _layer(LayerType.APPLICATION, "shop.application"),
            _layer(LayerType.INFRASTRUCTURE, "shop.infra"),
        ]
        deps = [
            _dep(LayerType.APPLICATION, LayerType.DOMAIN, 8),
            _dep(LayerType.DOMAIN, LayerType.INFRASTRUCTURE, 1),
        ]
        assert determine_architecture_pattern(layers, deps) is ArchitecturePattern.ONION

    def test_mostly_outward_falls_back_to_layered(self):
        layers = [
            _layer(LayerType.DOMAIN, "shop.domain"),
            _layer(LayerType.APPLICATION, "shop.application"),
            _layer(LayerType.INFRASTRUCTURE, "shop.infra"),
        ]
        deps = [
            _dep(LayerType.APPLICATION, LayerType.DOMAIN, 1),
            _dep(LayerType.DOMAIN, LayerType.INFRASTRUCTURE, 3),
        ]
        assert determine_architecture_pattern(layers, deps) is ArchitecturePattern.LAYERED
