"""
Shared fixtures: small hand-checked passenger tables, a larger synthetic one,
Kaggle-format CSVs on disk, and a laureate table.
"""

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pandas as pd
import pytest
import yaml


KAGGLE_COLUMNS = {
    "passenger_id": "PassengerId",
    "survived": "Survived",
    "pclass": "Pclass",
    "name": "Name",
    "sex": "Sex",
    "age": "Age",
    "sib_sp": "SibSp",
    "parch": "Parch",
    "ticket": "Ticket",
    "fare": "Fare",
    "cabin": "Cabin",
    "embarked": "Embarked",
}


@pytest.fixture
def passenger_table():
    """Ten passengers with normalized column names; rows 8-9 form the test partition."""
    return pd.DataFrame({
        'passenger_id': [1, 2, 3, 4, 5, 6, 7, 8, 9, 10],
        'survived': [0, 1, 1, 1, 0, 0, 0, 0, np.nan, np.nan],
        'pclass': [3, 1, 3, 1, 3, 3, 1, 3, 3, 2],
        'name': [
            'Braund, Mr. Owen Harris',
            'Cumings, Mrs. John Bradley (Florence Briggs Thayer)',
            'Heikkinen, Miss. Laina',
            'Futrelle, Mrs. Jacques Heath (Lily May Peel)',
            'Allen, Mr. William Henry',
            'Moran, Master. James',
            'McCarthy, Mr. Timothy J',
            'Palsson, Master. Gosta Leonard',
            'Johnson, Mrs. Oscar W (Elisabeth Vilhelmina Berg)',
            'Nasser, Mrs. Nicholas (Adele Achem)'
        ],
        'sex': ['male', 'female', 'female', 'female', 'male', 'male', 'male', 'male', 'female', 'female'],
        'age': [22.0, 38.0, 26.0, 35.0, np.nan, 54.0, np.nan, 2.0, 27.0, 14.0],
        'sib_sp': [1, 1, 0, 1, 0, 0, 0, 3, 0, 1],
        'parch': [0, 0, 0, 0, 0, 0, 0, 1, 2, 0],
        'ticket': ['A/5 21171', 'PC 17599', 'STON/O2. 3101282', '113803', '373450',
                   '330877', '17463', '349909', '347742', '237736'],
        'fare': [7.2500, 71.2833, 7.9250, 53.1000, np.nan, 8.4583, 51.8625, 21.0750, 11.1333, 30.0708],
        'cabin': [np.nan, 'C85', np.nan, 'C123', np.nan, np.nan, 'E46', np.nan, np.nan, np.nan],
        'embarked': ['S', 'C', 'S', 'S', 'S', 'Q', 'S', 'S', np.nan, ''],
        'is_train': [True] * 8 + [False] * 2,
    })


def make_passengers(n: int = 120, seed: int = 0, train_fraction: float = 0.75) -> pd.DataFrame:
    """Synthetic combined passenger table; survival follows sex and childhood."""
    rng = np.random.RandomState(seed)
    surnames = ["Smith", "Brown", "Kelly", "Andersson", "Sage", "Goodwin", "Rice", "Skoog", "Panula", "Asplund"]
    titles = ["Mr", "Mrs", "Miss", "Master", "Dr", "Rev", "Col"]
    title = [titles[i % len(titles)] for i in range(n)]
    sex = ["female" if t in ("Mrs", "Miss") else "male" for t in title]

    age = rng.uniform(1, 70, size=n).round(1)
    age[rng.rand(n) < 0.2] = np.nan
    fare = rng.uniform(5, 100, size=n).round(2)
    fare[[3, 17]] = np.nan
    embarked = rng.choice(["S", "C", "Q"], size=n).astype(object)
    embarked[5] = np.nan
    embarked[11] = ""

    n_train = int(n * train_fraction)
    survived = np.array(
        [1.0 if (s == "female" or (not np.isnan(a) and a < 12)) else 0.0 for s, a in zip(sex, age)]
    )
    survived[n_train:] = np.nan

    return pd.DataFrame({
        "passenger_id": np.arange(1, n + 1),
        "survived": survived,
        "pclass": rng.randint(1, 4, size=n),
        "name": [f"{surnames[i % len(surnames)]}, {title[i]}. Person {i}" for i in range(n)],
        "sex": sex,
        "age": age,
        "sib_sp": rng.randint(0, 4, size=n),
        "parch": rng.randint(0, 3, size=n),
        "ticket": [f"T{i}" for i in range(n)],
        "fare": fare,
        "cabin": np.nan,
        "embarked": embarked,
        "is_train": np.arange(n) < n_train,
    })


@pytest.fixture
def synthetic_passengers():
    return make_passengers()


@pytest.fixture
def kaggle_csvs(tmp_path):
    """train.csv / test.csv in the competition's own column naming under tmp_path/data/raw."""
    table = make_passengers()
    raw_dir = tmp_path / "data" / "raw"
    raw_dir.mkdir(parents=True)

    train = table.loc[table["is_train"]].drop(columns=["is_train"])
    test = table.loc[~table["is_train"]].drop(columns=["is_train", "survived"])
    train["survived"] = train["survived"].astype(int)

    train.rename(columns=KAGGLE_COLUMNS).to_csv(raw_dir / "train.csv", index=False)
    test.rename(columns=KAGGLE_COLUMNS).to_csv(raw_dir / "test.csv", index=False)
    return raw_dir / "train.csv", raw_dir / "test.csv"


@pytest.fixture
def titanic_config_file(tmp_path, kaggle_csvs):
    """Small, fast Titanic config pointing at the kaggle_csvs fixture."""
    config = {
        "train_path": "data/raw/train.csv",
        "test_path": "data/raw/test.csv",
        "output_dir": "artifacts/titanic",
        "modeling": {
            "models": ["logistic", "decision_tree", "random_forest", "conditional_forest"],
            "model_params": {
                "random_forest": {"n_estimators": 25},
                "conditional_forest": {"n_estimators": 25},
            },
            "cv_folds": 3,
        },
    }
    path = tmp_path / "configs" / "titanic.yaml"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump(config))
    return path


@pytest.fixture
def laureate_table():
    """Laureates in the TidyTuesday column layout, before name normalization."""
    return pd.DataFrame({
        "prize_year": [1901, 1903, 1911, 1921, 1964, 2014, 1979, 1901, 1917, 2007, 1954],
        "category": ["Physics", "Physics", "Chemistry", "Physics", "Peace", "Peace",
                     "Peace", "Literature", "Peace", "Economics", "Chemistry"],
        "full_name": ["Wilhelm Conrad Röntgen", "Marie Curie", "Marie Curie", "Albert Einstein",
                      "Martin Luther King Jr.", "Malala Yousafzai", "Mother Teresa",
                      "Sully Prudhomme", "International Committee of the Red Cross",
                      "Leonid Hurwicz", "Linus Pauling"],
        "laureate_type": ["Individual"] * 8 + ["Organization"] + ["Individual"] * 2,
        "birth_date": ["1845-03-27", "1867-11-07", "1867-11-07", "1879-03-14", "1929-01-15",
                       "1997-07-12", "1910-08-26", "1839-03-16", np.nan, "1917-08-21", "1901-00-00"],
    })
