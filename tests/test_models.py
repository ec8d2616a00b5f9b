import pytest

from sqlanalyzer.models import (
    APIResponse,
    ColumnInfo,
    DatabaseInfo,
    DatabaseRequest,
    LexicalRequest,
    QueryRequest,
    StatementAnalysis,
    SyntacticResult,
    TableInfo,
    Token,
)


def test_lexical_request_reads_all_fields():
    req = LexicalRequest.from_dict(
        {
            "createDB": "CREATE DATABASE a",
            "useDB": "USE DATABASE a",
            "createTable": "CREATE TABLE t (x INTEGER)",
            "insertData": "INSERT INTO t VALUES (1)",
            "modifyData": "DELETE FROM t WHERE x = 1",
            "deleteDB": "DROP DATABASE a",
        }
    )
    assert req.statements() == [
        "CREATE DATABASE a",
        "USE DATABASE a",
        "CREATE TABLE t (x INTEGER)",
        "INSERT INTO t VALUES (1)",
        "DELETE FROM t WHERE x = 1",
        "DROP DATABASE a",
    ]


def test_lexical_request_missing_and_null_fields_are_empty():
    req = LexicalRequest.from_dict({"createDB": "CREATE DATABASE a", "useDB": None})
    assert req.create_db == "CREATE DATABASE a"
    assert req.use_db == ""
    assert req.delete_db == ""


def test_lexical_request_keys_match_case_insensitively():
    req = LexicalRequest.from_dict({"createdb": "CREATE DATABASE b"})
    assert req.create_db == "CREATE DATABASE b"


def test_exact_key_wins_over_case_insensitive_match():
    req = QueryRequest.from_dict({"QUERY": "other", "query": "exact"})
    assert req.query == "exact"


def test_non_string_field_is_rejected():
    with pytest.raises(ValueError):
        DatabaseRequest.from_dict({"database": 5})


@pytest.mark.parametrize("body", [None, [], "text", 3])
def test_non_object_body_is_rejected(body):
    with pytest.raises(ValueError):
        QueryRequest.from_dict(body)


def test_database_and_query_requests():
    assert DatabaseRequest.from_dict({"database": "shop"}).database == "shop"
    assert QueryRequest.from_dict({}).query == ""


def test_api_response_converts_nested_models():
    analysis = StatementAnalysis(
        statement="USE x",
        tokens=[Token("USE", "KEYWORD"), Token("x", "IDENTIFIER")],
        keywords=[Token("USE", "KEYWORD")],
    )
    body = APIResponse(success=True, message="ok", data=[analysis]).to_dict()
    assert body == {
        "success": True,
        "message": "ok",
        "data": [
            {
                "statement": "USE x",
                "tokens": [
                    {"value": "USE", "type": "KEYWORD"},
                    {"value": "x", "type": "IDENTIFIER"},
                ],
                "keywords": [{"value": "USE", "type": "KEYWORD"}],
            }
        ],
    }


def test_api_response_plain_data_and_none():
    assert APIResponse(False, "bad").to_dict()["data"] is None
    nested = APIResponse(True, "m", {"syntactic": SyntacticResult(valid=True)}).to_dict()
    assert nested["data"]["syntactic"]["valid"] is True


def test_syntactic_result_uses_wire_key_names():
    result = SyntacticResult(valid=False, errors=["e"], parse_tree="p", command_type="c")
    assert result.to_dict() == {
        "valid": False,
        "errors": ["e"],
        "parseTree": "p",
        "commandType": "c",
    }


def test_database_info_to_dict():
    table = TableInfo(
        name="t",
        columns=[ColumnInfo("id", "INTEGER")],
        data=[{"id": 1}],
    )
    info = DatabaseInfo(name="shop", tables=[table])
    assert info.to_dict() == {
        "name": "shop",
        "tables": [
            {"name": "t", "columns": [{"name": "id", "type": "INTEGER"}], "data": [{"id": 1}]}
        ],
    }