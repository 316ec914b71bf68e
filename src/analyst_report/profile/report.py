from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Sequence

from ..utils import format_count, format_number, format_percent, plural
from .quality import DatasetQuality
from .rules import (
    ADDITIONAL_RULES,
    MODELING_RULES,
    PREPROCESSING_RULES,
    Recommendation,
    RuleContext,
    evaluate,
)
from .stats import ColumnKind, ColumnProfile, Imbalance, Skew


class SectionTag(str, Enum):
    """Section headers. Consumers match on these strings; keep them stable."""

    TITLE = "DATA SCIENCE ANALYSIS REPORT"
    EXECUTIVE_SUMMARY = "EXECUTIVE SUMMARY"
    STRUCTURE = "DATASET STRUCTURE AND DIMENSIONALITY"
    VARIABLES = "DETAILED VARIABLE ANALYSIS"
    QUALITY = "DATA QUALITY AND INTEGRITY ASSESSMENT"
    PREPROCESSING = "RECOMMENDED PREPROCESSING STEPS"
    MODELING = "MACHINE LEARNING AND MODELING RECOMMENDATIONS"
    ADDITIONAL = "ADDITIONAL DATA SCIENCE RECOMMENDATIONS"
    CONCLUSION = "CONCLUSION"


@dataclass(frozen=True)
class Section:
    tag: SectionTag
    lines: tuple[str, ...]

    @property
    def header(self) -> str:
        return self.tag.value


@dataclass(frozen=True)
class Report:
    sections: tuple[Section, ...]

    def section(self, tag: SectionTag) -> Section:
        for s in self.sections:
            if s.tag is tag:
                return s
        raise KeyError(tag.value)

    def lines(self) -> list[str]:
        out: list[str] = []
        for s in self.sections:
            out.append(s.header)
            out.append("")
            out.extend(s.lines)
            out.append("")
        return out

    def text(self) -> str:
        return "\n".join(self.lines()).rstrip("\n") + "\n"

    def __str__(self) -> str:
        return self.text()


def _paragraphs(*paras: str) -> tuple[str, ...]:
    out: list[str] = []
    for p in paras:
        out.append(p)
        out.append("")
    return tuple(out)


def _numbered(items: Sequence[Recommendation], *, empty: str) -> tuple[str, ...]:
    if not items:
        return _paragraphs(empty)
    return _paragraphs(*(f"{i}. {item.text}" for i, item in enumerate(items, start=1)))


def title_section() -> Section:
    return Section(SectionTag.TITLE, ("Comprehensive Dataset Evaluation and Insights",))


def executive_summary(ctx: RuleContext, quality: DatasetQuality) -> Section:
    c = quality.completeness
    if c >= 95:
        verdict = "excellent data quality suitable for advanced modeling"
    elif c >= 80:
        verdict = "good data quality appropriate for most analytical tasks"
    elif c >= 60:
        verdict = "moderate data quality requiring some preprocessing"
    else:
        verdict = "limited data quality necessitating significant data cleaning"
    return Section(
        SectionTag.EXECUTIVE_SUMMARY,
        _paragraphs(
            f"This dataset comprises {format_count(ctx.row_count)} observations across "
            f"{ctx.column_count} distinct variables. The overall data completeness stands at "
            f"{format_percent(c)} percent, with {format_count(quality.populated_cells)} populated "
            f"values out of {format_count(quality.total_cells)} total possible data points. "
            f"This level of completeness indicates {verdict}."
        ),
    )


def structure_section(columns: Sequence[ColumnProfile], row_count: int) -> Section:
    ratio = len(columns) / row_count if row_count else float("inf")
    if ratio < 0.01:
        dim = "low, which is favorable for most machine learning algorithms"
    elif ratio < 0.1:
        dim = "moderate, suitable for various modeling approaches"
    else:
        dim = (
            "relatively high, which may benefit from dimensionality reduction techniques such "
            "as PCA or feature selection methods"
        )
    names = ", ".join(c.name for c in columns)
    return Section(
        SectionTag.STRUCTURE,
        _paragraphs(
            f"The dataset contains {len(columns)} variables: {names}. With "
            f"{format_count(row_count)} observations and {len(columns)} features, the data "
            f"dimensionality is {dim}."
        ),
    )


def _empty_column_lines(col: ColumnProfile) -> tuple[str, ...]:
    return (
        f"Variable: {col.name} (Empty)",
        "This variable contains no populated values and requires data collection before "
        "analysis. Remove this variable or populate it before modeling.",
        "",
    )


def _numeric_column_lines(col: ColumnProfile) -> tuple[str, ...]:
    s = col.numeric
    assert s is not None
    n = format_number
    lines = [
        f"Variable: {col.name} (Numeric)",
        f"Statistical Summary: This continuous variable exhibits a range from {n(s.min)} "
        f"(minimum) to {n(s.max)} (maximum), yielding a range of {n(s.range)}. The central "
        f"tendency measures include a mean of {n(s.mean)} and median of {n(s.median)}. The "
        f"standard deviation is {n(s.std)}, indicating {s.variability} variability in the data.",
        "",
    ]

    if s.skew is Skew.SYMMETRIC:
        shape = "approximately symmetric distribution"
    elif s.skew is Skew.RIGHT:
        shape = "right-skewed distribution (positive skew)"
    else:
        shape = "left-skewed distribution (negative skew)"
    if s.mean > s.median:
        why = (
            "The mean being higher than the median suggests that extreme high values are pulling "
            "the average upward, which is common in positively skewed distributions."
        )
    elif s.mean < s.median:
        why = (
            "The mean being lower than the median indicates that extreme low values are pulling "
            "the average downward, typical of negatively skewed distributions."
        )
    else:
        why = (
            "The similarity between mean and median suggests a relatively symmetric distribution "
            "around the central value."
        )
    lines += [f"Distribution Characteristics: The data exhibits {shape}. {why}", ""]

    if s.outliers:
        lines += [
            f"Outlier Detection: Using the Interquartile Range (IQR) method with Q1 at {n(s.q1)} "
            f"and Q3 at {n(s.q3)}, we identified {format_count(len(s.outliers))} outliers "
            f"({format_percent(s.outlier_percent)} percent of observations). These values fall "
            f"outside the range of {n(s.lower_fence)} to {n(s.upper_fence)}. Consider outlier "
            "treatment methods such as Winsorization, transformation, or removal depending on "
            "whether these represent genuine extreme values or data errors.",
            "",
        ]

    lines += list(_missing_numeric_lines(col))
    return tuple(lines)


def _missing_numeric_lines(col: ColumnProfile) -> tuple[str, ...]:
    if col.missing_count == 0:
        return ("Data Completeness: This variable has no missing values, which is optimal for analysis.", "")
    pct = col.missing_percent
    if pct > 5:
        advice = (
            "This significant level of missingness may require imputation techniques such as "
            "mean/median imputation, regression imputation, or multiple imputation methods. "
            "Alternatively, consider using algorithms that handle missing values naturally, such "
            "as XGBoost or LightGBM."
        )
    else:
        advice = (
            "This relatively low level of missingness can be addressed through simple imputation "
            "methods or by using complete case analysis."
        )
    return (
        f"Missing Data: {format_count(col.missing_count)} observations ({format_percent(pct)} "
        f"percent) contain missing or non-numeric values for this variable. {advice}",
        "",
    )


def _categorical_column_lines(col: ColumnProfile) -> tuple[str, ...]:
    s = col.categorical
    assert s is not None
    if s.is_identifier:
        note = (
            "Each observation has a unique value, suggesting this may be an identifier rather "
            "than a predictive feature. Consider removing this variable from modeling."
        )
    elif s.cardinality > s.total * 0.8:
        note = (
            "The high cardinality suggests this variable may benefit from grouping rare "
            "categories or using target encoding techniques."
        )
    elif s.cardinality < 10:
        note = (
            "The low cardinality makes this variable suitable for one-hot encoding in most "
            "machine learning algorithms."
        )
    else:
        note = (
            "The moderate cardinality may require careful encoding strategies such as target "
            "encoding, frequency encoding, or grouping rare categories."
        )
    lines = [
        f"Variable: {col.name} (Categorical)",
        f"Cardinality Analysis: This categorical variable contains {format_count(s.cardinality)} "
        f"unique categories among {format_count(s.total)} observations, resulting in a "
        f"cardinality ratio of {format_percent(s.cardinality_ratio * 100)} percent. {note}",
        "",
    ]

    top = ", ".join(
        f'"{value}" ({format_count(count)} occurrences, {format_percent(100 * count / s.total)} percent)'
        for value, count in s.top_values
    )
    if s.imbalance is Imbalance.SEVERE:
        balance = (
            "The high concentration in a single category indicates severe class imbalance, which "
            "may require resampling techniques or algorithm adjustments."
        )
    elif s.imbalance is Imbalance.MODERATE:
        balance = (
            "The moderate concentration in the dominant category suggests some imbalance that "
            "should be monitored during modeling."
        )
    else:
        balance = "The distribution shows reasonable balance across categories."
    lines += [f"Category Distribution: The most frequent categories are {top}. {balance}", ""]

    if col.missing_count > 0:
        lines += [
            f"Missing Data: {format_count(col.missing_count)} observations "
            f"({format_percent(col.missing_percent)} percent) lack values for this categorical "
            "variable. Consider treating missing values as a separate category, using mode "
            "imputation, or applying more sophisticated techniques like KNN imputation if "
            "appropriate.",
            "",
        ]
    return tuple(lines)


def variable_lines(col: ColumnProfile) -> tuple[str, ...]:
    if col.kind is ColumnKind.EMPTY:
        return _empty_column_lines(col)
    if col.kind is ColumnKind.NUMERIC:
        return _numeric_column_lines(col)
    return _categorical_column_lines(col)


def variables_section(columns: Iterable[ColumnProfile]) -> Section:
    lines: list[str] = []
    for col in columns:
        lines.extend(variable_lines(col))
    return Section(SectionTag.VARIABLES, tuple(lines))


def quality_section(ctx: RuleContext, quality: DatasetQuality) -> Section:
    if quality.duplicate_rows > 0:
        dupes = (
            f"Duplicate analysis identified {format_count(quality.duplicate_rows)} duplicate "
            f"observations ({format_percent(quality.duplicate_percent)} percent of the dataset). "
            "These duplicates should be investigated to determine if they represent legitimate "
            "repeated measurements or data collection errors. Consider using df.drop_duplicates() "
            "in Python or similar methods to remove exact duplicates after validation."
        )
    else:
        dupes = (
            "No duplicate observations were detected, which indicates strong data integrity and "
            "quality control measures."
        )
    paras = [
        f"Overall Quality Metrics: The dataset exhibits {quality.label} data quality with "
        f"{format_percent(quality.completeness)} percent completeness across all variables. {dupes}"
    ]
    if ctx.skewed:
        paras.append(
            "Skewness Detected: The following variables exhibit distributional skewness: "
            f"{', '.join(ctx.skewed)}. For modeling purposes, consider applying transformations "
            "such as log transformation, square root transformation, or Box-Cox transformation to "
            "normalize these distributions. This is particularly important for linear models and "
            "algorithms that assume normally distributed features."
        )
    if ctx.outliers:
        k = len(ctx.outliers)
        paras.append(
            f"Outlier Presence: Outliers were detected in {k} {plural(k, 'variable')}: "
            f"{', '.join(ctx.outliers)}. Depending on your analysis goals, consider strategies "
            "such as robust scaling (using RobustScaler), outlier capping (Winsorization), or "
            "using tree-based algorithms that are naturally resistant to outliers (Random Forest, "
            "XGBoost)."
        )
    return Section(SectionTag.QUALITY, _paragraphs(*paras))


def preprocessing_section(ctx: RuleContext) -> Section:
    return Section(
        SectionTag.PREPROCESSING,
        _numbered(evaluate(PREPROCESSING_RULES, ctx), empty="No preprocessing steps are required."),
    )


def modeling_section(ctx: RuleContext) -> Section:
    return Section(
        SectionTag.MODELING,
        _numbered(
            evaluate(MODELING_RULES, ctx),
            empty="The dataset does not yet support a specific algorithm recommendation.",
        ),
    )


def additional_section(ctx: RuleContext) -> Section:
    return Section(SectionTag.ADDITIONAL, _numbered(evaluate(ADDITIONAL_RULES, ctx), empty="None."))


def conclusion_section(ctx: RuleContext, quality: DatasetQuality) -> Section:
    c = quality.completeness
    strength = "strong" if c >= 90 else "adequate" if c >= 70 else "developing"
    num, cat = len(ctx.numeric), len(ctx.categorical)
    space = "rich" if num + cat >= 10 else "sufficient"
    attention = ""
    if ctx.outliers:
        k = len(ctx.outliers)
        attention += f"Attention should be given to outlier treatment in {k} {plural(k, 'variable')}. "
    if ctx.skewed:
        k = len(ctx.skewed)
        attention += f"Distribution normalization is advised for {k} skewed {plural(k, 'variable')}. "
    return Section(
        SectionTag.CONCLUSION,
        (
            f"This dataset comprising {format_count(ctx.row_count)} observations across "
            f"{ctx.column_count} variables presents {strength} foundations for machine learning "
            f"and statistical analysis. The dataset contains {num} numeric "
            f"{plural(num, 'variable')} and {cat} categorical {plural(cat, 'variable')}, "
            f"providing {space} feature space for modeling. {attention}By following the "
            "preprocessing recommendations and selecting appropriate algorithms based on the data "
            "characteristics outlined in this report, data scientists can develop robust "
            "predictive models and extract meaningful insights to drive data-driven "
            "decision-making.",
        ),
    )


def build_report(columns: Sequence[ColumnProfile], quality: DatasetQuality) -> Report:
    ctx = RuleContext.build(columns, quality)
    return Report(
        (
            title_section(),
            executive_summary(ctx, quality),
            structure_section(columns, quality.row_count),
            variables_section(columns),
            quality_section(ctx, quality),
            preprocessing_section(ctx),
            modeling_section(ctx),
            additional_section(ctx),
            conclusion_section(ctx, quality),
        )
    )
