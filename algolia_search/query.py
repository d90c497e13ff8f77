"""
Search Query Parameters for the Algolia Search Client

This module defines the immutable set of search parameters sent with a query and
the encoder that turns them into the canonical URL-encoded parameter string used
by both single-index searches and the batched multi-index endpoint.

Key Features:
- Frozen QueryParams value type with builder methods returning copies
- Fixed, documented parameter order for deterministic output
- Parameters equal to their default are left out of the wire string
- Explicit enum to wire token tables
- Geo filters (bounding box takes precedence over a radius)

Example Usage:
    from algolia_search.query import QueryParams, TypoTolerance

    params = (
        QueryParams(query="jeans")
        .with_hits_per_page(10)
        .with_typo_tolerance(TypoTolerance.MIN)
    )
    params.to_query_string()
    # 'typoTolerance=min&hitsPerPage=10&query=jeans'
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union
from urllib.parse import quote_plus

# A list-valued parameter may also be given as an already joined string
StringList = Union[str, Tuple[str, ...]]

DEFAULT_HITS_PER_PAGE = 20
DEFAULT_MIN_WORD_SIZE_FOR_1_TYPO = 3
DEFAULT_MIN_WORD_SIZE_FOR_2_TYPOS = 7


class QueryType(Enum):
    """How query words are interpreted as prefixes."""

    PREFIX_ALL = "prefix_all"
    PREFIX_LAST = "prefix_last"
    PREFIX_NONE = "prefix_none"


class RemoveWordsType(Enum):
    """Word removal strategy when a query returns no result."""

    REMOVE_LAST_WORDS = "remove_last_words"
    REMOVE_FIRST_WORDS = "remove_first_words"
    REMOVE_NONE = "remove_none"
    REMOVE_ALL_OPTIONAL = "remove_all_optional"


class TypoTolerance(Enum):
    """Typo tolerance policy."""

    TRUE = "true"
    FALSE = "false"
    MIN = "min"
    STRICT = "strict"


# Wire tokens; None means the default, which is never sent
QUERY_TYPE_TOKENS: Dict[QueryType, Optional[str]] = {
    QueryType.PREFIX_ALL: "prefixAll",
    QueryType.PREFIX_LAST: None,
    QueryType.PREFIX_NONE: "prefixNone",
}

REMOVE_WORDS_TOKENS: Dict[RemoveWordsType, Optional[str]] = {
    RemoveWordsType.REMOVE_LAST_WORDS: "LastWords",
    RemoveWordsType.REMOVE_FIRST_WORDS: "FirstWords",
    RemoveWordsType.REMOVE_NONE: None,
    RemoveWordsType.REMOVE_ALL_OPTIONAL: "allOptional",
}

TYPO_TOLERANCE_TOKENS: Dict[TypoTolerance, Optional[str]] = {
    TypoTolerance.TRUE: None,
    TypoTolerance.FALSE: "false",
    TypoTolerance.MIN: "min",
    TypoTolerance.STRICT: "strict",
}


def _format_number(value: float) -> str:
    return str(float(value))


@dataclass(frozen=True)
class BoundingBox:
    """Rectangle given by two opposite corners."""

    latitude_p1: float
    longitude_p1: float
    latitude_p2: float
    longitude_p2: float

    def to_param(self) -> str:
        coordinates = ",".join(
            _format_number(v)
            for v in (
                self.latitude_p1,
                self.longitude_p1,
                self.latitude_p2,
                self.longitude_p2,
            )
        )
        return f"insideBoundingBox={coordinates}"


@dataclass(frozen=True)
class AroundRadius:
    """Radius filter around a point, or around the caller IP when no point is set."""

    radius: int
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    precision: Optional[int] = None

    def to_param(self) -> str:
        parts = []
        if self.latitude is not None and self.longitude is not None:
            parts.append(
                f"aroundLatLng={_format_number(self.latitude)},"
                f"{_format_number(self.longitude)}"
            )
        parts.append(f"aroundRadius={int(self.radius)}")
        if self.precision is not None:
            parts.append(f"aroundPrecision={int(self.precision)}")
        return "&".join(parts)


def _as_string_list(value: Any) -> Optional[StringList]:
    if value is None or isinstance(value, str):
        return value
    return tuple(str(v) for v in value)


_LIST_FIELDS = (
    "attributes",
    "attributes_to_highlight",
    "attributes_to_snippet",
    "analytics_tags",
    "numeric_filters",
    "facets",
    "facet_filters",
    "optional_words",
    "restrict_searchable_attributes",
)


@dataclass(frozen=True)
class QueryParams:
    """Immutable search parameters.

    Every field defaults to the value the service assumes when the parameter
    is absent, so a default instance encodes to an empty string. Builder
    methods return a modified copy and never touch the receiver.
    """

    query: Optional[str] = None
    attributes: Optional[StringList] = None
    attributes_to_highlight: Optional[StringList] = None
    attributes_to_snippet: Optional[StringList] = None
    typo_tolerance: TypoTolerance = TypoTolerance.TRUE
    min_proximity: int = 1
    highlight_pre_tag: Optional[str] = None
    highlight_post_tag: Optional[str] = None
    allow_typos_on_numeric_tokens: bool = True
    min_word_size_for_1_typo: int = DEFAULT_MIN_WORD_SIZE_FOR_1_TYPO
    min_word_size_for_2_typos: int = DEFAULT_MIN_WORD_SIZE_FOR_2_TYPOS
    get_ranking_info: bool = False
    ignore_plural: bool = False
    analytics: bool = True
    analytics_tags: Optional[StringList] = None
    synonyms: bool = True
    replace_synonyms_in_highlight: bool = True
    distinct: int = 0
    advanced_syntax: bool = False
    page: int = 0
    hits_per_page: int = DEFAULT_HITS_PER_PAGE
    tag_filters: Optional[str] = None
    numeric_filters: Optional[StringList] = None
    inside_bounding_box: Optional[BoundingBox] = None
    around_lat_lng: Optional[AroundRadius] = None
    around_lat_lng_via_ip: bool = False
    facets: Optional[StringList] = None
    facet_filters: Optional[StringList] = None
    max_number_of_facets: int = -1
    optional_words: Optional[StringList] = None
    restrict_searchable_attributes: Optional[StringList] = None
    remove_words_if_no_result: RemoveWordsType = RemoveWordsType.REMOVE_NONE
    query_type: QueryType = QueryType.PREFIX_LAST

    def __post_init__(self) -> None:
        # Lists are frozen into tuples so a caller's list cannot change us later
        for name in _LIST_FIELDS:
            object.__setattr__(self, name, _as_string_list(getattr(self, name)))

    def with_query(self, query: Optional[str]) -> "QueryParams":
        return replace(self, query=query)

    def with_query_type(self, query_type: QueryType) -> "QueryParams":
        return replace(self, query_type=query_type)

    def with_attributes_to_retrieve(
        self, attributes: Optional[Sequence[str]]
    ) -> "QueryParams":
        """Restrict the attributes returned for each hit ("*" retrieves all)."""
        return replace(self, attributes=attributes)

    def with_attributes_to_highlight(
        self, attributes: Optional[Sequence[str]]
    ) -> "QueryParams":
        return replace(self, attributes_to_highlight=attributes)

    def with_attributes_to_snippet(
        self, attributes: Optional[Sequence[str]]
    ) -> "QueryParams":
        """Set snippeted attributes, each optionally suffixed with ":<nb words>"."""
        return replace(self, attributes_to_snippet=attributes)

    def with_typo_tolerance(self, typo_tolerance: TypoTolerance) -> "QueryParams":
        return replace(self, typo_tolerance=typo_tolerance)

    def enable_typo_tolerance(self, enabled: bool) -> "QueryParams":
        return self.with_typo_tolerance(
            TypoTolerance.TRUE if enabled else TypoTolerance.FALSE
        )

    def with_min_proximity(self, value: int) -> "QueryParams":
        return replace(self, min_proximity=value)

    def with_highlighting_tags(self, pre_tag: str, post_tag: str) -> "QueryParams":
        return replace(self, highlight_pre_tag=pre_tag, highlight_post_tag=post_tag)

    def enable_typos_on_numeric_tokens(self, enabled: bool) -> "QueryParams":
        return replace(self, allow_typos_on_numeric_tokens=enabled)

    def with_min_word_size_to_allow_one_typo(self, nb_chars: int) -> "QueryParams":
        return replace(self, min_word_size_for_1_typo=nb_chars)

    def with_min_word_size_to_allow_two_typos(self, nb_chars: int) -> "QueryParams":
        return replace(self, min_word_size_for_2_typos=nb_chars)

    def with_ranking_info(self, enabled: bool) -> "QueryParams":
        return replace(self, get_ranking_info=enabled)

    def with_ignore_plural(self, enabled: bool) -> "QueryParams":
        return replace(self, ignore_plural=enabled)

    def enable_analytics(self, enabled: bool) -> "QueryParams":
        return replace(self, analytics=enabled)

    def with_analytics_tags(self, tags: Optional[Sequence[str]]) -> "QueryParams":
        return replace(self, analytics_tags=tags)

    def enable_synonyms(self, enabled: bool) -> "QueryParams":
        return replace(self, synonyms=enabled)

    def enable_replace_synonyms_in_highlight(self, enabled: bool) -> "QueryParams":
        return replace(self, replace_synonyms_in_highlight=enabled)

    def enable_distinct(self, value: Union[bool, int]) -> "QueryParams":
        """Enable de-duplication; an int keeps that many hits per distinct key."""
        if isinstance(value, bool):
            value = 1 if value else 0
        return replace(self, distinct=value)

    def enable_advanced_syntax(self, enabled: bool) -> "QueryParams":
        return replace(self, advanced_syntax=enabled)

    def with_page(self, page: int) -> "QueryParams":
        return replace(self, page=page)

    def with_hits_per_page(self, hits_per_page: int) -> "QueryParams":
        return replace(self, hits_per_page=hits_per_page)

    def with_tag_filters(self, tags: Optional[str]) -> "QueryParams":
        """Filter on tags, e.g. "(tag1,tag2),tag3" for (tag1 OR tag2) AND tag3."""
        return replace(self, tag_filters=tags)

    def with_numeric_filters(
        self, filters: Optional[Union[str, Sequence[str]]]
    ) -> "QueryParams":
        """Filter on numeric attributes, e.g. ["price>100", "stock>0"] (AND)."""
        return replace(self, numeric_filters=filters)

    def inside_bounding_box(
        self,
        latitude_p1: float,
        longitude_p1: float,
        latitude_p2: float,
        longitude_p2: float,
    ) -> "QueryParams":
        return replace(
            self,
            inside_bounding_box=BoundingBox(
                latitude_p1, longitude_p1, latitude_p2, longitude_p2
            ),
        )

    def around_latitude_longitude(
        self,
        latitude: float,
        longitude: float,
        radius: int,
        precision: Optional[int] = None,
    ) -> "QueryParams":
        """Search around a point; radius and precision are in meters."""
        return replace(
            self,
            around_lat_lng=AroundRadius(radius, latitude, longitude, precision),
        )

    def around_latitude_longitude_via_ip(
        self,
        enabled: bool,
        radius: int,
        precision: Optional[int] = None,
    ) -> "QueryParams":
        """Search around the location of the caller IP address."""
        return replace(
            self,
            around_lat_lng=AroundRadius(radius, precision=precision),
            around_lat_lng_via_ip=enabled,
        )

    def with_facets(self, facets: Optional[Sequence[str]]) -> "QueryParams":
        return replace(self, facets=facets)

    def with_facet_filters(
        self, filters: Optional[Union[str, Sequence[str]]]
    ) -> "QueryParams":
        """Filter on facet values, e.g. ["category:Book", "author:John Doe"].

        A list is joined with commas, so a value that itself contains a comma
        loses its boundary. Pass a raw string such as
        '["brand:Smith, Jones", "color:red"]' to send a JSON array instead.
        """
        return replace(self, facet_filters=filters)

    def with_max_number_of_facets(self, n: int) -> "QueryParams":
        return replace(self, max_number_of_facets=n)

    def with_optional_words(
        self, words: Optional[Union[str, Sequence[str]]]
    ) -> "QueryParams":
        return replace(self, optional_words=words)

    def restrict_searchable_attributes(
        self, attributes: Optional[Union[str, Sequence[str]]]
    ) -> "QueryParams":
        return replace(self, restrict_searchable_attributes=attributes)

    def remove_words_if_no_result(self, kind: RemoveWordsType) -> "QueryParams":
        return replace(self, remove_words_if_no_result=kind)

    def to_query_string(self) -> str:
        return encode_query(self)


def _encode(value: StringList) -> str:
    if not isinstance(value, str):
        value = ",".join(value)
    return quote_plus(value, encoding="utf-8")


def encode_query(params: QueryParams) -> str:
    """Encode search parameters into the canonical URL parameter string.

    Parameters are visited in a fixed order and only those differing from
    their default are emitted, so equal parameter sets always produce the
    same string.

    Args:
        params: Search parameters

    Returns:
        "&"-joined "name=value" pairs, empty when every field is at its default
    """
    parts: List[str] = []

    if params.attributes is not None:
        parts.append(f"attributes={_encode(params.attributes)}")
    if params.attributes_to_highlight is not None:
        parts.append(
            f"attributesToHighlight={_encode(params.attributes_to_highlight)}"
        )
    if params.attributes_to_snippet is not None:
        parts.append(f"attributesToSnippet={_encode(params.attributes_to_snippet)}")

    typo_token = TYPO_TOLERANCE_TOKENS[params.typo_tolerance]
    if typo_token is not None:
        parts.append(f"typoTolerance={typo_token}")

    if params.min_proximity > 1:
        parts.append(f"minProximity={params.min_proximity}")
    if params.highlight_pre_tag is not None and params.highlight_post_tag is not None:
        parts.append(f"highlightPreTag={_encode(params.highlight_pre_tag)}")
        parts.append(f"highlightPostTag={_encode(params.highlight_post_tag)}")
    if not params.allow_typos_on_numeric_tokens:
        parts.append("allowTyposOnNumericTokens=false")
    if params.min_word_size_for_1_typo != DEFAULT_MIN_WORD_SIZE_FOR_1_TYPO:
        parts.append(f"minWordSizefor1Typo={params.min_word_size_for_1_typo}")
    if params.min_word_size_for_2_typos != DEFAULT_MIN_WORD_SIZE_FOR_2_TYPOS:
        parts.append(f"minWordSizefor2Typos={params.min_word_size_for_2_typos}")
    if params.get_ranking_info:
        parts.append("getRankingInfo=1")
    if params.ignore_plural:
        parts.append("ignorePlural=true")
    if not params.analytics:
        parts.append("analytics=0")
    if params.analytics_tags is not None:
        parts.append(f"analyticsTags={_encode(params.analytics_tags)}")
    if not params.synonyms:
        parts.append("synonyms=0")
    if not params.replace_synonyms_in_highlight:
        parts.append("replaceSynonymsInHighlight=0")
    if params.distinct > 0:
        parts.append(f"distinct={params.distinct}")
    if params.advanced_syntax:
        parts.append("advancedSyntax=1")
    if params.page > 0:
        parts.append(f"page={params.page}")
    if params.hits_per_page != DEFAULT_HITS_PER_PAGE and params.hits_per_page > 0:
        parts.append(f"hitsPerPage={params.hits_per_page}")
    if params.tag_filters is not None:
        parts.append(f"tagFilters={_encode(params.tag_filters)}")
    if params.numeric_filters is not None:
        parts.append(f"numericFilters={_encode(params.numeric_filters)}")

    # A bounding box wins over a radius filter
    if params.inside_bounding_box is not None:
        parts.append(params.inside_bounding_box.to_param())
    elif params.around_lat_lng is not None:
        parts.append(params.around_lat_lng.to_param())
    if params.around_lat_lng_via_ip:
        parts.append("aroundLatLngViaIP=true")

    if params.query is not None:
        parts.append(f"query={_encode(params.query)}")
    if params.facets is not None:
        parts.append(f"facets={_encode(params.facets)}")
    if params.facet_filters is not None:
        parts.append(f"facetFilters={_encode(params.facet_filters)}")
    if params.max_number_of_facets > 0:
        parts.append(f"maxNumberOfFacets={params.max_number_of_facets}")
    if params.optional_words is not None:
        parts.append(f"optionalWords={_encode(params.optional_words)}")
    if params.restrict_searchable_attributes is not None:
        parts.append(
            "restrictSearchableAttributes="
            f"{_encode(params.restrict_searchable_attributes)}"
        )

    remove_token = REMOVE_WORDS_TOKENS[params.remove_words_if_no_result]
    if remove_token is not None:
        parts.append(f"removeWordsIfNoResult={remove_token}")
    query_type_token = QUERY_TYPE_TOKENS[params.query_type]
    if query_type_token is not None:
        parts.append(f"queryType={query_type_token}")

    return "&".join(parts)


@dataclass(frozen=True)
class IndexedQuery:
    """A query targeting one index inside a batched request."""

    index_name: str
    query: QueryParams = field(default_factory=QueryParams)


def build_batch_request(queries: Sequence[IndexedQuery]) -> Dict[str, Any]:
    """Build the body of a multi-index query, preserving input order."""
    return {
        "requests": [
            {"indexName": q.index_name, "params": encode_query(q.query)}
            for q in queries
        ]
    }


__all__ = [
    "AroundRadius",
    "BoundingBox",
    "IndexedQuery",
    "QueryParams",
    "QueryType",
    "RemoveWordsType",
    "TypoTolerance",
    "build_batch_request",
    "encode_query",
]
