"""Tests for layered architecture analysis and violation detection."""

from class_insight.architecture.analyzer import LayeredArchitectureAnalyzer
from class_insight.architecture.models import ArchitecturePattern, LayerType, ViolationType
from class_insight.architecture.violations import detect_violations
from class_insight.facts.models import NodeKind
from class_insight.graph.builder import build_dependency_graph


def _analyze(facts):
    graph = build_dependency_graph(facts)
    return LayeredArchitectureAnalyzer().analyze(facts, graph)


class TestLayeredArchitectureAnalyzer:
    def test_empty_project(self):
        result = _analyze([])
        assert result.layers == ()
        assert result.dependencies == ()
        assert result.violations == ()
        assert result.pattern is ArchitecturePattern.UNKNOWN

    def test_layers_and_dependencies(self, user_domain):
        result = _analyze(user_domain)

        assert [layer.type for layer in result.layers] == [
            LayerType.APPLICATION,
            LayerType.DOMAIN,
        ]
        domain = result.layers[1]
        assert domain.classes == ("domain.User",)
        assert domain.packages == ("domain",)
        assert domain.level == LayerType.DOMAIN.level

        assert len(result.dependencies) == 1
        dep = result.dependencies[0]
        assert (dep.from_layer, dep.to_layer, dep.count) == (
            LayerType.APPLICATION,
            LayerType.DOMAIN,
            1,
        )
        assert dep.is_valid
        assert result.violations == ()
        assert result.pattern is ArchitecturePattern.LAYERED

    def test_unlayered_classes_are_left_out(self, make_fact):
        result = _analyze([make_fact("Widget", package="misc"), make_fact("Gadget")])
        assert result.layers == ()
        assert result.pattern is ArchitecturePattern.UNKNOWN

    def test_default_package_not_listed(self, make_fact):
        result = _analyze([make_fact("OrderService")])
        assert result.layers[0].type is LayerType.APPLICATION
        assert result.layers[0].packages == ()

    def test_invalid_dependency_is_counted(self, make_fact, make_method):
        facts = [
            make_fact(
                "Order",
                package="shop.domain",
                imports=["shop.application.Checkout"],
                methods=[make_method("submit", params=["Checkout"])],
            ),
            make_fact("Checkout", package="shop.application"),
        ]
        result = _analyze(facts)
        assert [(d.from_layer, d.to_layer, d.is_valid) for d in result.dependencies] == [
            (LayerType.DOMAIN, LayerType.APPLICATION, False)
        ]


class TestViolations:
    def test_layer_violation(self, make_fact, make_method):
        facts = [
            make_fact(
                "Order",
                package="shop.domain",
                imports=["shop.application.Checkout"],
                methods=[make_method("submit", params=["Checkout"])],
            ),
            make_fact("Checkout", package="shop.application"),
        ]
        result = _analyze(facts)

        assert len(result.violations) == 1
        violation = result.violations[0]
        assert violation.violation_type is ViolationType.LAYER_VIOLATION
        assert violation.from_class == "shop.domain.Order"
        assert violation.to_class == "shop.application.Checkout"
        assert violation.suggestion
        assert result.violations_of("shop.domain.Order") == (violation,)
        assert result.violations_of("shop.application.Checkout") == ()

    def test_cycle_members_get_one_violation_each(self, make_fact):
        facts = [
            make_fact("Order", package="shop", properties=[("customer", "Customer")]),
            make_fact("Customer", package="shop", properties=[("orders", "List<Order>")]),
        ]
        graph = build_dependency_graph(facts)
        violations = detect_violations(facts, graph)

        circular = [v for v in violations if v.violation_type is ViolationType.CIRCULAR_DEPENDENCY]
        assert {(v.from_class, v.to_class) for v in circular} == {
            ("shop.Customer", "shop.Order"),
            ("shop.Order", "shop.Customer"),
        }

    def test_concrete_outer_composition_breaks_inversion(self, make_fact):
        facts = [
            make_fact(
                "Checkout",
                package="shop.application",
                imports=["shop.data.SqlOrderRepository"],
                properties=[("orders", "SqlOrderRepository")],
            ),
            make_fact("SqlOrderRepository", package="shop.data"),
        ]
        violations = detect_violations(facts, build_dependency_graph(facts))
        assert [v.violation_type for v in violations] == [ViolationType.DEPENDENCY_INVERSION]
        assert violations[0].to_class == "shop.data.SqlOrderRepository"

    def test_interface_target_is_fine(self, make_fact):
        facts = [
            make_fact(
                "Checkout",
                package="shop.application",
                imports=["shop.data.OrderRepository"],
                properties=[("orders", "OrderRepository")],
            ),
            make_fact("OrderRepository", package="shop.data", kind=NodeKind.INTERFACE),
        ]
        assert detect_violations(facts, build_dependency_graph(facts)) == []

    def test_abstract_target_is_fine(self, make_fact):
        facts = [
            make_fact(
                "Checkout",
                package="shop.application",
                imports=["shop.data.BaseRepository"],
                properties=[("orders", "BaseRepository")],
            ),
            make_fact("BaseRepository", package="shop.data", modifiers=["abstract"]),
        ]
        assert detect_violations(facts, build_dependency_graph(facts)) == []

    def test_usage_of_outer_class_is_not_inversion(self, make_fact, make_method):
        facts = [
            make_fact(
                "Checkout",
                package="shop.application",
                imports=["shop.data.SqlOrderRepository"],
                methods=[make_method("run", params=["SqlOrderRepository"])],
            ),
            make_fact("SqlOrderRepository", package="shop.data"),
        ]
        assert detect_violations(facts, build_dependency_graph(facts)) == []
