"""Tests for the model registry and the survival trainer."""

import numpy as np
import pandas as pd
import pytest
from sklearn.ensemble import ExtraTreesClassifier, RandomForestClassifier
from sklearn.linear_model import LogisticRegression
from sklearn.tree import DecisionTreeClassifier

from eda_lab.core.exceptions import MissingColumnsError
from eda_lab.core.utils import ModelingConfig
from eda_lab.features import derive_features
from eda_lab.modeling import BaseModel, ModelRegistry, SurvivalTrainer


@pytest.fixture
def derived_passengers(synthetic_passengers):
    return derive_features(synthetic_passengers)


@pytest.fixture
def fast_config():
    return ModelingConfig(
        model_params={
            "random_forest": {"n_estimators": 20},
            "conditional_forest": {"n_estimators": 20},
        },
        cv_folds=3,
    )


class TestModelRegistry:
    """Test model registry functionality."""

    def test_available_models(self):
        assert ModelRegistry().get_available_models() == [
            "logistic", "decision_tree", "random_forest", "conditional_forest"
        ]

    @pytest.mark.parametrize("name,estimator", [
        ("logistic", LogisticRegression),
        ("decision_tree", DecisionTreeClassifier),
        ("random_forest", RandomForestClassifier),
        ("conditional_forest", ExtraTreesClassifier),
    ])
    def test_create_model(self, name, estimator):
        model = ModelRegistry().create_model(name)
        assert isinstance(model, BaseModel)
        assert isinstance(model.model, estimator)

    def test_default_hyperparameters(self):
        registry = ModelRegistry()
        tree = registry.create_model("decision_tree").model
        forest = registry.create_model("random_forest").model

        assert tree.min_samples_split == 20
        assert tree.max_depth == 30
        assert forest.n_estimators == 500

    def test_params_override_defaults(self):
        model = ModelRegistry().create_model("random_forest", {"n_estimators": 7})
        assert model.model.n_estimators == 7

    def test_unknown_model(self):
        with pytest.raises(ValueError, match="Unknown model 'svm'"):
            ModelRegistry().create_model("svm")

    def test_register_custom_model(self):
        class StumpModel(BaseModel):
            def _create_model(self, **params):
                return DecisionTreeClassifier(max_depth=1, **params)

        registry = ModelRegistry()
        registry.register_custom_model("stump", StumpModel)

        assert "stump" in registry.get_available_models()
        assert registry.create_model("stump").model.max_depth == 1

    def test_register_rejects_foreign_class(self):
        with pytest.raises(ValueError, match="BaseModel"):
            ModelRegistry().register_custom_model("bad", DecisionTreeClassifier)


class TestBaseModel:

    def test_predict_before_fit(self):
        model = ModelRegistry().create_model("logistic")
        with pytest.raises(ValueError, match="fitted"):
            model.predict(pd.DataFrame({"x": [1.0]}))

    def test_one_hot_for_categorical_columns(self):
        X = pd.DataFrame({"title_bins": ["title_1", "title_2", "title_3"] * 10, "age": np.arange(30.0)})
        y = pd.Series([0, 1, 1] * 10)

        model = ModelRegistry().create_model("decision_tree", categorical_columns=["title_bins"])
        model.fit(X, y)

        assert model.is_fitted
        assert set(model.predict(X)) <= {0, 1}
        assert model.predict_proba(X).shape == (30, 2)

    def test_save_and_load(self, tmp_path):
        X = pd.DataFrame({"age": [1.0, 2.0, 30.0, 40.0]})
        y = pd.Series([1, 1, 0, 0])
        model = ModelRegistry().create_model("logistic").fit(X, y)

        path = tmp_path / "model.joblib"
        model.save(path)
        restored = BaseModel.load(path)

        np.testing.assert_array_equal(restored.predict(X), model.predict(X))

    def test_save_unfitted(self, tmp_path):
        with pytest.raises(ValueError, match="No model"):
            ModelRegistry().create_model("logistic").save(tmp_path / "m.joblib")


class TestSurvivalTrainer:

    def test_split_by_partition(self, derived_passengers):
        train, test = SurvivalTrainer().split(derived_passengers)
        assert len(train) == 90
        assert len(test) == 30

    def test_feature_matrix(self, derived_passengers):
        X = SurvivalTrainer().feature_matrix(derived_passengers)
        assert list(X.columns) == ["title_bins", "age", "pclass", "sib_sp"]
        assert X.notna().all().all()

    def test_feature_matrix_missing_column(self, derived_passengers):
        with pytest.raises(MissingColumnsError, match="title_bins"):
            SurvivalTrainer().feature_matrix(derived_passengers.drop(columns=["title_bins"]))

    def test_feature_matrix_rejects_gaps(self, synthetic_passengers):
        # raw ages still have gaps, so the imputation step was skipped
        table = synthetic_passengers.assign(title_bins="title_1")
        with pytest.raises(ValueError, match="age"):
            SurvivalTrainer().feature_matrix(table)

    def test_fit_all(self, derived_passengers, fast_config):
        trainer = SurvivalTrainer(fast_config)
        results = trainer.fit_all(derived_passengers)

        assert list(results) == fast_config.models
        for result in results.values():
            assert 0.0 <= result.train_accuracy <= 1.0
            assert len(result.cv_scores) == 3
            assert 0.0 <= result.cv_mean <= 1.0

    def test_fit_subset(self, derived_passengers, fast_config):
        results = SurvivalTrainer(fast_config).fit_all(derived_passengers, models=["logistic"])
        assert list(results) == ["logistic"]

    def test_cv_disabled(self, derived_passengers):
        config = ModelingConfig(models=["decision_tree"], cv_folds=0)
        result = SurvivalTrainer(config).fit_all(derived_passengers)["decision_tree"]
        assert result.cv_scores == []
        assert result.cv_mean is None

    def test_predict_all(self, derived_passengers, fast_config):
        trainer = SurvivalTrainer(fast_config)
        trainer.fit_all(derived_passengers)
        predictions = trainer.predict_all(derived_passengers)

        assert set(predictions) == set(fast_config.models)
        for preds in predictions.values():
            assert len(preds) == 30
            assert set(np.unique(preds)) <= {0, 1}

    def test_predict_before_fit(self, derived_passengers):
        with pytest.raises(ValueError, match="fit_all"):
            SurvivalTrainer().predict_all(derived_passengers)

    def test_same_seed_same_predictions(self, derived_passengers, fast_config):
        first = SurvivalTrainer(fast_config)
        first.fit_all(derived_passengers, models=["random_forest"])
        second = SurvivalTrainer(fast_config)
        second.fit_all(derived_passengers, models=["random_forest"])

        np.testing.assert_array_equal(
            first.predict_all(derived_passengers)["random_forest"],
            second.predict_all(derived_passengers)["random_forest"],
        )
