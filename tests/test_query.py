import pytest

from bbapi.query import Builder, Filter, Filters

LIST_QUERY = """
    select *
    from smart_yield_transaction_history
    $filters$
    order by included_in_block desc, tx_index desc, log_index desc
    $offset$ $limit$;
"""

COUNT_QUERY = """
    select count(*)
    from smart_yield_transaction_history
    $filters$
"""


def test_build_query_with_list_filter():
    qb = Builder()
    qb.filters.add("user_address", "0xdeadbeef")
    qb.filters.add("protocol_id", ["compound/v2", "aave/v2"])

    query, params = qb.with_pagination(0, 1).run(LIST_QUERY)

    assert "protocol_id = ANY($2)" in query
    assert params[1] == ["compound/v2", "aave/v2"]
    assert isinstance(params[1], list)


def test_build_query():
    qb = Builder()
    qb.filters.add("user_address", "0xdeadbeef")
    qb.filters.add("protocol_id", "compound/v2")

    query, params = qb.with_pagination(0, 2).run(LIST_QUERY)

    assert "user_address = $1" in query
    assert "protocol_id = $2" in query
    assert "offset $3" in query
    assert "limit $4" in query
    assert len(params) == 4
    assert params[2] == 0
    assert params[3] == 2

    qb.filters = Filters().add("user_address", "0xdeadbeef")
    query, params = qb.run(COUNT_QUERY)

    assert "user_address = $1" in query
    assert len(params) == 1


def test_with_pagination_returns_copy():
    qb = Builder()
    paged = qb.with_pagination(20, 10)
    assert paged.use_pagination is True
    assert (paged.offset, paged.limit) == (20, 10)
    assert qb.use_pagination is False
    assert paged.filters is qb.filters


def test_without_pagination_markers_are_emptied():
    query, params = Builder().run("select 1 $filters$ $offset$ $limit$")
    assert query == "select 1   "
    assert params == []


def test_raw_filter_takes_no_parameter():
    qb = Builder()
    qb.filters.add("starts_on", "5", ">")
    qb.filters.add_raw("starts_on < extract(epoch from now())::bigint")
    qb.filters.add("target", "system")

    query, params = qb.run("select * from t $filters$")

    assert query == (
        "select * from t where starts_on > $1 and "
        "starts_on < extract(epoch from now())::bigint and target = $2"
    )
    assert params == ["5", "system"]


def test_custom_operator():
    qb = Builder()
    qb.filters.add("lower(title)", "%abc%", "like")
    query, params = qb.run("$filters$")
    assert query == "where lower(title) like $1"
    assert params == ["%abc%"]


def test_filters_chain_and_len():
    filters = Filters().add("a", 1).add_raw("b is null")
    assert len(filters) == 2
    assert list(filters)[0] == Filter(key="a", value=1, where="=")
    assert list(filters)[1].is_raw


@pytest.mark.parametrize("marker", ["$filters$", "$offset$", "$limit$"])
def test_only_first_marker_is_replaced(marker):
    qb = Builder().with_pagination(0, 5)
    qb.filters.add("x", 1)
    query, _ = qb.run(f"{marker} {marker}")
    assert query.endswith(marker)