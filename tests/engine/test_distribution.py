import numpy as np
import pytest

from optkit.engine.coevolution import (
    ContextVector,
    CooperativeCoevolutionProblemAdapter,
    DimensionAllocation,
    ImperfectSplitDistributionStrategy,
    PerfectSplitDistributionStrategy,
    check_partition,
    get_distribution_strategy,
)
from optkit.foundation.exceptions import (
    ConfigurationError,
    IndivisibleDimensionError,
    InsufficientPopulationsError,
    InvalidStrategyError,
)
from optkit.foundation.problem import FunctionMinimisationProblem, Spherical


class Recorder:
    def __init__(self):
        self.problem = None

    def set_optimisation_problem(self, problem):
        self.problem = problem


def _distribute(strategy, dimension, populations):
    problem = FunctionMinimisationProblem(Spherical(dimension=dimension))
    context = ContextVector(np.zeros(dimension))
    recorders = [Recorder() for _ in range(populations)]
    allocations = strategy.distribute(recorders, problem, context)
    return allocations, recorders


@pytest.mark.parametrize("dimension", range(2, 13))
def test_imperfect_split_partitions_every_dimension(dimension):
    for populations in range(2, dimension + 1):
        allocations, _ = _distribute(ImperfectSplitDistributionStrategy(), dimension, populations)
        covered = sorted(i for a in allocations for i in a.indices())
        assert covered == list(range(dimension))
        check_partition(allocations, dimension)


@pytest.mark.parametrize("dimension", range(2, 13))
def test_imperfect_split_gives_remainder_to_leading_populations(dimension):
    for populations in range(2, dimension + 1):
        allocations, _ = _distribute(ImperfectSplitDistributionStrategy(), dimension, populations)
        rem = dimension % populations
        lengths = [a.length for a in allocations]
        assert lengths[:rem] == [-(-dimension // populations)] * rem
        assert lengths[rem:] == [dimension // populations] * (populations - rem)


def test_imperfect_split_ten_over_three():
    allocations, _ = _distribute(ImperfectSplitDistributionStrategy(), 10, 3)
    assert [a.length for a in allocations] == [4, 3, 3]
    assert [a.offset for a in allocations] == [0, 4, 7]


def test_distribution_rebinds_populations_to_adapters():
    allocations, recorders = _distribute(ImperfectSplitDistributionStrategy(), 7, 2)
    for recorder, allocation in zip(recorders, allocations):
        assert isinstance(recorder.problem, CooperativeCoevolutionProblemAdapter)
        assert recorder.problem.allocation == allocation
        assert recorder.problem.domain.dimension == allocation.length


@pytest.mark.parametrize("strategy", [ImperfectSplitDistributionStrategy(), PerfectSplitDistributionStrategy()])
@pytest.mark.parametrize("populations", [0, 1])
def test_fewer_than_two_populations_is_rejected(strategy, populations):
    with pytest.raises(InsufficientPopulationsError):
        _distribute(strategy, 6, populations)


def test_perfect_split_equal_slices():
    allocations, _ = _distribute(PerfectSplitDistributionStrategy(), 12, 4)
    assert [(a.offset, a.length) for a in allocations] == [(0, 3), (3, 3), (6, 3), (9, 3)]


def test_perfect_split_rejects_remainder():
    with pytest.raises(IndivisibleDimensionError):
        _distribute(PerfectSplitDistributionStrategy(), 10, 3)


def test_more_populations_than_dimensions_is_rejected():
    with pytest.raises(ConfigurationError):
        _distribute(ImperfectSplitDistributionStrategy(), 2, 3)


def test_rejected_distribution_leaves_populations_unbound():
    problem = FunctionMinimisationProblem(Spherical(dimension=2))
    recorders = [Recorder() for _ in range(3)]
    with pytest.raises(ConfigurationError):
        ImperfectSplitDistributionStrategy().distribute(recorders, problem, ContextVector(np.zeros(2)))
    assert all(recorder.problem is None for recorder in recorders)


def test_registry_lookup():
    assert isinstance(get_distribution_strategy("Imperfect"), ImperfectSplitDistributionStrategy)
    assert isinstance(get_distribution_strategy("perfect"), PerfectSplitDistributionStrategy)
    with pytest.raises(InvalidStrategyError):
        get_distribution_strategy("random")


class TestAllocation:
    def test_slice_helpers(self):
        allocation = DimensionAllocation(4, 3)
        assert allocation.stop == 7
        assert list(allocation.indices()) == [4, 5, 6]
        assert np.arange(10)[allocation.as_slice()].tolist() == [4, 5, 6]

    @pytest.mark.parametrize("offset, length", [(-1, 2), (0, 0)])
    def test_invalid_allocation(self, offset, length):
        with pytest.raises(ConfigurationError):
            DimensionAllocation(offset, length)

    def test_validate_against_dimension(self):
        DimensionAllocation(4, 3).validate(7)
        with pytest.raises(ConfigurationError):
            DimensionAllocation(4, 3).validate(6)

    def test_check_partition_detects_overlap_and_gap(self):
        with pytest.raises(ConfigurationError, match="overlap"):
            check_partition([DimensionAllocation(0, 3), DimensionAllocation(2, 2)], 4)
        with pytest.raises(ConfigurationError, match="covers"):
            check_partition([DimensionAllocation(0, 2), DimensionAllocation(3, 1)], 4)
