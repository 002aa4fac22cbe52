import pytest

from figcompose.datasets import list_datasets, load_dataset


def test_list_datasets():
    assert list_datasets() == ["cars", "flowers", "growth"]


def test_dataset_shapes():
    cars = load_dataset("cars")
    assert list(cars.columns) == ["displ", "cyl", "drv", "hwy", "cty", "class"]
    assert len(cars) == 90
    assert set(cars["drv"]) <= {"f", "4", "r"}

    growth = load_dataset("growth")
    assert len(growth) == 93
    assert set(growth["treatment"]) == {"control", "low", "high"}

    flowers = load_dataset("flowers")
    assert flowers["species"].value_counts().to_dict() == {"setosa": 50, "versicolor": 50, "virginica": 50}
    assert (flowers.drop(columns="species") > 0).all().all()


def test_datasets_are_deterministic():
    assert load_dataset("cars").equals(load_dataset("cars"))
    assert not load_dataset("cars", seed=1).equals(load_dataset("cars", seed=2))


def test_unknown_dataset():
    with pytest.raises(KeyError, match="cars"):
        load_dataset("planets")
