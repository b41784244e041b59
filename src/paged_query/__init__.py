from .compiler import FilterClause, build_operator, compile_clause, parse_clause
from .config import DEFAULT_CONFIG, PaginationConfig
from .exceptions import (
    GrammarViolationError,
    MalformedValueError,
    PagedQueryError,
    PageOutOfRangeError,
    QueryValidationError,
    UnknownRuleError,
)
from .expressions import (
    SORT_PATTERN,
    WHERE_PATTERN,
    SortKey,
    fold_sort,
    parse_sort,
    parse_where,
    validate_sort,
    validate_where,
)
from .meta import PageMeta
from .operators import FindOperator, OperatorType
from .options import PageOptions, RepositoryOptions
from .page import Page
from .paths import PropertyPath, deep_merge, fold, parse_path
from .relations import extract_relations, fold_relations
from .rules import FilterRule, SortOrder

__all__ = [
    # Request options
    "PageOptions",
    "RepositoryOptions",
    "PaginationConfig",
    "DEFAULT_CONFIG",
    # Response
    "Page",
    "PageMeta",
    # Rules & operators
    "FilterRule",
    "SortOrder",
    "FindOperator",
    "OperatorType",
    # Expressions
    "SORT_PATTERN",
    "WHERE_PATTERN",
    "SortKey",
    "FilterClause",
    "validate_sort",
    "validate_where",
    "parse_sort",
    "parse_where",
    "fold_sort",
    "parse_clause",
    "build_operator",
    "compile_clause",
    # Paths & relations
    "PropertyPath",
    "parse_path",
    "fold",
    "deep_merge",
    "extract_relations",
    "fold_relations",
    # Exceptions
    "PagedQueryError",
    "QueryValidationError",
    "GrammarViolationError",
    "UnknownRuleError",
    "MalformedValueError",
    "PageOutOfRangeError",
]
