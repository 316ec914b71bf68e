"""Recommendation rule tables.

Each table is an ordered tuple of rules. A rule pairs a predicate over the
computed profile with the text to emit when the predicate holds. Thresholds
are fixed; they mirror the heuristics the report has always used and are not
derived from a fitted model.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence

from ..utils import format_count
from .quality import DatasetQuality
from .stats import ColumnKind, ColumnProfile


DEEP_LEARNING_MIN_ROWS = 10_000
DEEP_LEARNING_MIN_NUMERIC = 5
RANDOM_FOREST_MIN_ROWS = 1_000
CROSS_VALIDATION_MIN_ROWS = 5_000
IMPUTE_BELOW_COMPLETENESS = 95.0
LINEAR_MIN_COMPLETENESS = 95.0
MISSINGNESS_BELOW_COMPLETENESS = 90.0
MANY_NUMERIC = 5
SOME_NUMERIC = 2


@dataclass(frozen=True)
class RuleContext:
    row_count: int
    column_count: int
    completeness: float
    duplicate_rows: int
    numeric: tuple[str, ...]
    categorical: tuple[str, ...]
    skewed: tuple[str, ...]
    outliers: tuple[str, ...]
    identifiers: tuple[str, ...]
    empty: tuple[str, ...]

    @classmethod
    def build(cls, columns: Sequence[ColumnProfile], quality: DatasetQuality) -> "RuleContext":
        return cls(
            row_count=quality.row_count,
            column_count=len(columns),
            completeness=quality.completeness,
            duplicate_rows=quality.duplicate_rows,
            numeric=tuple(c.name for c in columns if c.kind is ColumnKind.NUMERIC),
            categorical=tuple(c.name for c in columns if c.is_feature_categorical),
            skewed=tuple(
                f"{c.name} ({c.numeric.skew.value})" for c in columns if c.is_skewed and c.numeric
            ),
            outliers=tuple(c.name for c in columns if c.has_outliers),
            identifiers=tuple(c.name for c in columns if c.is_identifier),
            empty=tuple(c.name for c in columns if c.kind is ColumnKind.EMPTY),
        )


@dataclass(frozen=True)
class Rule:
    key: str
    applies: Callable[[RuleContext], bool]
    text: Callable[[RuleContext], str]


@dataclass(frozen=True)
class Recommendation:
    key: str
    text: str


def evaluate(rules: Sequence[Rule], ctx: RuleContext) -> tuple[Recommendation, ...]:
    return tuple(Recommendation(r.key, r.text(ctx)) for r in rules if r.applies(ctx))


PREPROCESSING_RULES: tuple[Rule, ...] = (
    Rule(
        "drop_empty",
        lambda c: bool(c.empty),
        lambda c: (
            f"Remove or populate empty variables ({', '.join(c.empty)}). "
            "They carry no information for analysis in their current state."
        ),
    ),
    Rule(
        "drop_identifiers",
        lambda c: bool(c.identifiers),
        lambda c: (
            f"Exclude identifier-like variables ({', '.join(c.identifiers)}) from modeling. "
            "Unique per-row values do not generalize and encourage overfitting."
        ),
    ),
    Rule(
        "impute_missing",
        lambda c: c.completeness < IMPUTE_BELOW_COMPLETENESS,
        lambda c: (
            "Handle missing values using appropriate imputation methods. For numeric variables, "
            "consider mean/median imputation or more advanced techniques like KNN imputation or "
            "iterative imputation (MICE). For categorical variables, mode imputation or treating "
            "missing as a separate category may be appropriate."
        ),
    ),
    Rule(
        "deduplicate",
        lambda c: c.duplicate_rows > 0,
        lambda c: (
            f"Remove or investigate {format_count(c.duplicate_rows)} duplicate observations to "
            "ensure model training on unique data points."
        ),
    ),
    Rule(
        "transform_skew",
        lambda c: bool(c.skewed),
        lambda c: (
            f"Apply normalization transformations to skewed variables ({', '.join(c.skewed)}). "
            "Consider log transformation for right-skewed data or power transformations for "
            "left-skewed data."
        ),
    ),
    Rule(
        "treat_outliers",
        lambda c: bool(c.outliers),
        lambda c: (
            f"Address outliers in {', '.join(c.outliers)} through capping, transformation, or by "
            "choosing robust algorithms. For regression tasks, consider using Huber loss or "
            "quantile regression."
        ),
    ),
    Rule(
        "scale_numeric",
        lambda c: len(c.numeric) > 0,
        lambda c: (
            "Scale numeric features using StandardScaler for algorithms sensitive to feature "
            "scales (SVM, Neural Networks, K-Nearest Neighbors) or RobustScaler if outliers are "
            "present."
        ),
    ),
    Rule(
        "encode_categorical",
        lambda c: len(c.categorical) > 0,
        lambda c: (
            "Encode categorical variables appropriately. Use one-hot encoding for low cardinality "
            "features (less than 10 categories), target encoding or frequency encoding for high "
            "cardinality features, and consider ordinal encoding if there is a natural order."
        ),
    ),
)


MODELING_RULES: tuple[Rule, ...] = (
    Rule(
        "deep_learning",
        lambda c: c.row_count >= DEEP_LEARNING_MIN_ROWS and len(c.numeric) > DEEP_LEARNING_MIN_NUMERIC,
        lambda c: (
            "Deep Learning approaches (Neural Networks, Deep Neural Networks) are viable given the "
            f"substantial sample size of {format_count(c.row_count)} observations and "
            f"{len(c.numeric)} numeric features. Consider using frameworks like TensorFlow or PyTorch."
        ),
    ),
    Rule(
        "gradient_boosting",
        lambda c: len(c.numeric) > 0 and len(c.categorical) > 0,
        lambda c: (
            "Gradient Boosting algorithms (XGBoost, LightGBM, CatBoost) are highly recommended as "
            "they handle mixed data types effectively, are robust to outliers and missing values, "
            "and typically provide excellent predictive performance. CatBoost is particularly "
            "suitable given the presence of categorical variables as it handles them natively."
        ),
    ),
    Rule(
        "random_forest",
        lambda c: c.row_count >= RANDOM_FOREST_MIN_ROWS,
        lambda c: (
            "Random Forest and other ensemble methods are excellent choices, offering good "
            "performance, feature importance insights, and resistance to overfitting through "
            "bagging. They work well with the current sample size and handle non-linear "
            "relationships effectively."
        ),
    ),
    Rule(
        "linear_models",
        lambda c: c.completeness >= LINEAR_MIN_COMPLETENESS and len(c.numeric) > SOME_NUMERIC,
        lambda c: (
            "Linear models (Linear Regression, Logistic Regression, Lasso, Ridge) are appropriate "
            "if interpretability is important. They perform best when features are normalized and "
            "outliers are addressed. Consider regularization (L1/L2) to prevent overfitting."
        ),
    ),
    Rule(
        "svm",
        lambda c: len(c.numeric) > 0,
        lambda c: (
            "Support Vector Machines (SVM) with RBF kernel can capture complex non-linear patterns, "
            "though they require feature scaling and are computationally intensive for large "
            "datasets. Consider using for datasets under 10,000 observations."
        ),
    ),
    Rule(
        "decision_trees",
        lambda c: len(c.categorical) > len(c.numeric),
        lambda c: (
            "Decision Trees and Rule-based models are interpretable options that handle "
            "categorical data naturally without requiring encoding, though they may be prone to "
            "overfitting without proper regularization."
        ),
    ),
)


ADDITIONAL_RULES: tuple[Rule, ...] = (
    Rule(
        "correlation_analysis",
        lambda c: len(c.numeric) > SOME_NUMERIC,
        lambda c: (
            "Perform correlation analysis and create a correlation matrix to identify "
            "multicollinearity among numeric features. High correlation (above 0.9) may "
            "necessitate feature selection or dimensionality reduction techniques like PCA."
        ),
    ),
    Rule(
        "cross_validation",
        lambda c: c.row_count >= CROSS_VALIDATION_MIN_ROWS,
        lambda c: (
            "Implement cross-validation strategies (k-fold cross-validation with k equals 5 or 10) "
            "to ensure robust model evaluation and prevent overfitting. For time-series data, use "
            "time-series cross-validation."
        ),
    ),
    Rule(
        "feature_interactions",
        lambda c: len(c.categorical) > 0 and len(c.numeric) > 0,
        lambda c: (
            "Conduct feature engineering to create interaction terms between categorical and "
            "numeric variables, which may capture non-linear relationships and improve model "
            "performance."
        ),
    ),
    Rule(
        "exploratory_plots",
        lambda c: bool(c.skewed) or bool(c.outliers),
        lambda c: (
            "Perform exploratory data analysis with visualization techniques (histograms, box "
            "plots, Q-Q plots) to better understand distributions and guide preprocessing "
            "decisions."
        ),
    ),
    Rule(
        "train_test_split",
        lambda c: True,
        lambda c: (
            "Split data into training, validation, and test sets using stratified sampling if "
            "dealing with classification problems. A common split is 70 percent training, 15 "
            "percent validation, and 15 percent test."
        ),
    ),
    Rule(
        "missingness_patterns",
        lambda c: c.completeness < MISSINGNESS_BELOW_COMPLETENESS,
        lambda c: (
            "Analyze missing data patterns using missingness heatmaps or correlation analysis. If "
            "data is Missing Not At Random (MNAR), consider specialized handling techniques or "
            "collecting additional data."
        ),
    ),
    Rule(
        "feature_selection",
        lambda c: len(c.numeric) > MANY_NUMERIC,
        lambda c: (
            "Consider feature selection techniques such as Recursive Feature Elimination (RFE), L1 "
            "regularization, or tree-based feature importance to identify the most predictive "
            "variables and reduce model complexity."
        ),
    ),
    Rule(
        "hyperparameter_tuning",
        lambda c: True,
        lambda c: (
            "Implement hyperparameter tuning using Grid Search or Randomized Search with "
            "cross-validation to optimize model performance. For computationally expensive "
            "models, consider Bayesian optimization."
        ),
    ),
    Rule(
        "baseline_models",
        lambda c: True,
        lambda c: (
            "Establish baseline models (simple heuristics or basic algorithms) before implementing "
            "complex models to ensure that added complexity provides meaningful performance gains."
        ),
    ),
)
