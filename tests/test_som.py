import math
import random

import pytest

from classic_ann import (
    ConfigurationMismatchError,
    DimensionMismatchError,
    NetworkError,
    SOMConfig,
    SOMNetwork,
)
from classic_ann.datasets import noisy_ramp_patterns, ramp_patterns


def snapshot(som: SOMNetwork):
    return [(list(node.fv), list(node.pv)) for node in som.nodes]


def test_grid_layout_is_row_major() -> None:
    som = SOMNetwork(3, 4, 5, 2, rng=random.Random(0))
    assert len(som.nodes) == 12
    assert som.radius == 3
    assert som.learning_rate == 0.05
    for index, node in enumerate(som.nodes):
        assert (node.x, node.y) == (index % 4, index // 4)
        assert len(node.fv) == 5 and len(node.pv) == 2
        assert all(0.0 <= v < 1.0 for v in node.fv + node.pv)
    assert som.node_at(2, 1) is som.nodes[6]
    with pytest.raises(IndexError):
        som.node_at(4, 0)


def test_from_config_is_reproducible() -> None:
    config = SOMConfig(height=4, width=4, feature_size=3, prototype_size=2, learning_rate=0.1, seed=7)
    first = SOMNetwork.from_config(config)
    second = SOMNetwork.from_config(config)
    assert snapshot(first) == snapshot(second)
    assert first.learning_rate == 0.1


def test_best_match_defaults_to_index_one() -> None:
    som = SOMNetwork(2, 2, 2, 1, rng=random.Random(0))
    assert som.best_match([10.0, 10.0]) == 1


def test_best_match_prefers_first_of_equal_nodes() -> None:
    som = SOMNetwork(2, 3, 2, 1, rng=random.Random(0))
    for node in som.nodes:
        node.fv = [0.9, 0.9]
    som.nodes[2].fv = [0.1, 0.2]
    som.nodes[4].fv = [0.1, 0.2]
    assert som.best_match([0.1, 0.2]) == 2
    som.nodes[2].fv = [0.3, 0.3]
    assert som.best_match([0.1, 0.2]) == 4


def test_neighborhood_update_uses_pre_update_vectors() -> None:
    som = SOMNetwork(5, 5, 3, 2, rng=random.Random(1))
    target_fv, target_pv = [0.2, 0.4, 0.6], [1.0, 0.0]
    before = snapshot(som)
    best = som.nodes[som.best_match(target_fv)]

    som._update_neighborhood(2, 2.5, 0.3, target_fv, target_pv)

    updated = 0
    for node, (fv, pv) in zip(som.nodes, before):
        d = math.hypot(best.x - node.x, best.y - node.y)
        if d < 2.5:
            step = math.exp(-(d * d) / (2 * 2.5 * 2)) * 0.3
            expected_fv = [v + step * (t - v) for v, t in zip(fv, target_fv)]
            expected_pv = [v + step * (t - v) for v, t in zip(pv, target_pv)]
            updated += 1
        else:
            expected_fv, expected_pv = fv, pv
        assert node.fv == pytest.approx(expected_fv)
        assert node.pv == pytest.approx(expected_pv)
    assert updated > 1


def test_single_epoch_uses_decayed_schedule() -> None:
    som = SOMNetwork(4, 4, 3, 2, rng=random.Random(1))
    history = som.train(1, [[0.2, 0.4, 0.6]], [[1.0, 0.0]])
    time_constant = 1 / math.log(som.radius)
    assert history.radii == [pytest.approx(som.radius * math.exp(-1 / time_constant))]
    assert history.learning_rates == [pytest.approx(som.learning_rate * math.exp(-1 / time_constant))]


def test_schedule_decays_to_unit_radius() -> None:
    som = SOMNetwork(6, 6, 2, 1, rng=random.Random(2))
    history = som.train(50, [[0.5, 0.5]], [[1.0]])
    assert len(history.radii) == 50
    assert all(a > b for a, b in zip(history.radii, history.radii[1:]))
    assert history.radii[-1] == pytest.approx(1.0)
    assert history.learning_rates[-1] == pytest.approx(0.05 / 6)


def test_configuration_mismatch_leaves_map_untouched() -> None:
    som = SOMNetwork(3, 3, 2, 2, rng=random.Random(4))
    before = snapshot(som)
    with pytest.raises(ConfigurationMismatchError) as excinfo:
        som.train(10, [[0.1, 0.2], [0.3, 0.4]], [[1.0, 0.0]])
    assert isinstance(excinfo.value, NetworkError)
    assert (excinfo.value.feature_count, excinfo.value.prototype_count) == (2, 1)
    assert snapshot(som) == before


def test_degenerate_requests_are_no_ops() -> None:
    som = SOMNetwork(3, 3, 2, 2, rng=random.Random(4))
    before = snapshot(som)
    assert som.train(0, [[0.1, 0.2]], [[1.0, 0.0]]).radii == []
    assert len(som.train(3, [], []).radii) == 3
    assert snapshot(som) == before
    assert SOMNetwork(0, 0, 2, 2).train(5, [[0.1, 0.2]], [[1.0, 0.0]]).radii == []


def test_unit_radius_map_trains_without_decay() -> None:
    som = SOMNetwork(1, 2, 1, 1, rng=random.Random(0))
    history = som.train(3, [[0.5]], [[1.0]])
    assert history.radii == [1.0, 1.0, 1.0]


def test_prediction_is_idempotent() -> None:
    som = SOMNetwork(4, 5, 3, 2, rng=random.Random(6))
    before = snapshot(som)
    prediction = som.predict([0.3, 0.3, 0.3])
    prediction[0] = 42.0
    assert som.predict([0.3, 0.3, 0.3]) != prediction
    som.predict_class([0.3, 0.3, 0.3])
    assert snapshot(som) == before


def test_predict_class_truncates_percentages() -> None:
    som = SOMNetwork(2, 2, 2, 3, rng=random.Random(0))
    index = som.best_match([0.5, 0.5])
    som.nodes[index].pv = [0.999, 0.5, 0.0149]
    assert som.predict_class([0.5, 0.5]) == [99, 50, 1]


def test_node_string_lists_vectors() -> None:
    som = SOMNetwork(1, 1, 2, 1, rng=random.Random(0))
    som.nodes[0].fv = [0.1, 0.25]
    som.nodes[0].pv = [1.0]
    assert str(som.nodes[0]) == "Node FV [0.10, 0.25, ] PV [1.00, ]"


def test_map_separates_training_patterns() -> None:
    features, prototypes = ramp_patterns()
    som = SOMNetwork(12, 12, 10, 3, rng=random.Random(0))
    som.train(1000, features, prototypes)
    for label, fv in enumerate(features):
        prediction = som.predict(fv)
        assert max(range(3), key=prediction.__getitem__) == label
        assert prediction[label] > 0.5


def test_noisy_patterns_are_classified() -> None:
    features, prototypes = ramp_patterns()
    som = SOMNetwork(12, 12, 10, 3, rng=random.Random(0))
    som.train(5000, features, prototypes)
    for label, fv in enumerate(noisy_ramp_patterns()):
        assert som.predict_class(fv)[label] > 85


@pytest.mark.parametrize(
    "features, prototypes, kind",
    [
        ([[0.1, 0.2, 0.3, 0.4], [0.1, 0.2]], [[1.0, 0.0], [0.0, 1.0]], "feature"),
        ([[0.1, 0.2, 0.3, 0.4]], [[1.0]], "prototype"),
    ],
)
def test_wrong_vector_length_leaves_map_untouched(features, prototypes, kind) -> None:
    som = SOMNetwork(3, 3, 4, 2, rng=random.Random(8))
    before = snapshot(som)
    with pytest.raises(DimensionMismatchError) as excinfo:
        som.train(1, features, prototypes)
    assert excinfo.value.kind == kind
    assert excinfo.value.index == len(features) - 1
    assert snapshot(som) == before
    assert all(len(node.fv) == 4 and len(node.pv) == 2 for node in som.nodes)
