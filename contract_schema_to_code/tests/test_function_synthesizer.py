"""
Tests for query function synthesis: overload expansion, parameter order,
defaults and body statements.
"""

from __future__ import annotations

import itertools

import pytest

from contract_schema_to_code.errors import MalformedOperationSchema, MissingResponseSchema, UnsupportedSchemaConstruct
from contract_schema_to_code.pipeline.analyzer import ContractAnalyzer, TypeKind, TypeRef
from contract_schema_to_code.pipeline.analyzer.ir_nodes import (
    AddRequestField,
    DecodeResponse,
    EncodeRequest,
    InitRequest,
    QueryContract,
    ReturnResponse,
)
from contract_schema_to_code.pipeline.config import CodeGeneratorConfig
from contract_schema_to_code.pipeline.contract_schema import ContractSchema


def _operation(name, properties=None, required=(), description=None):
    arguments = {"type": "object", "properties": properties or {}}
    if required:
        arguments["required"] = list(required)
    branch = {"type": "object", "required": [name], "properties": {name: arguments}}
    if description:
        branch["description"] = description
    return branch


def _analyze(operations, responses, interface="ITest", config=None):
    contract = ContractSchema.from_dict(
        {
            "contract_name": "test",
            "query": {"oneOf": operations},
            "responses": responses,
        }
    )
    return ContractAnalyzer(config or CodeGeneratorConfig()).analyze(contract, interface, "Test")


def _primitive(name, nullable=False):
    return TypeRef(kind=TypeKind.PRIMITIVE, name=name, is_nullable=nullable)


def _one_of(*type_names):
    return {"oneOf": [{"type": t} for t in type_names]}


class TestOverloadExpansion:
    def test_single_candidates_give_one_function(self):
        ir = _analyze(
            [_operation("balance", {"address": {"type": "string"}}, required=["address"])],
            {"balance": {"type": "string"}},
        )

        assert len(ir.functions) == 1
        function = ir.functions[0]
        assert function.name == "BalanceAsync"
        assert function.operation == "balance"
        assert [(p.name, p.type_ref) for p in function.parameters] == [("address", _primitive("string"))]
        assert function.return_type == _primitive("string")

    def test_cartesian_product_order(self):
        ir = _analyze(
            [
                _operation(
                    "pick",
                    {"a": _one_of("string", "integer"), "b": _one_of("boolean", "number", "string")},
                    required=["a", "b"],
                )
            ],
            {"pick": {"type": "boolean"}},
        )

        signatures = [tuple(p.type_ref.name for p in f.parameters) for f in ir.functions]
        assert signatures == [
            ("string", "boolean"),
            ("string", "number"),
            ("string", "string"),
            ("integer", "boolean"),
            ("integer", "number"),
            ("integer", "string"),
        ]
        assert all(f.name == "PickAsync" for f in ir.functions)

    def test_three_split_parameters(self):
        ir = _analyze(
            [
                _operation(
                    "pick",
                    {
                        "a": _one_of("string", "integer"),
                        "b": _one_of("boolean", "number", "string"),
                        "c": _one_of("integer", "boolean"),
                    },
                    required=["a", "b", "c"],
                )
            ],
            {"pick": {"type": "boolean"}},
        )

        signatures = [tuple(p.type_ref.name for p in f.parameters) for f in ir.functions]
        assert signatures == list(
            itertools.product(["string", "integer"], ["boolean", "number", "string"], ["integer", "boolean"])
        )

    def test_overloads_do_not_share_parameter_lists(self):
        ir = _analyze(
            [_operation("pick", {"a": _one_of("string", "integer"), "b": {"type": "string"}}, required=["a", "b"])],
            {"pick": {"type": "boolean"}},
        )

        first, second = ir.functions
        assert first.parameters is not second.parameters
        assert first.body is not second.body
        assert [p.name for p in first.parameters] == [p.name for p in second.parameters] == ["a", "b"]

    def test_overload_sets_are_grouped_per_operation(self):
        ir = _analyze(
            [
                _operation("pick", {"a": _one_of("string", "integer")}, required=["a"]),
                _operation("minter"),
            ],
            {"pick": {"type": "boolean"}, "minter": {"type": "string"}},
        )

        assert [[f.name for f in group] for group in ir.overload_sets()] == [
            ["PickAsync", "PickAsync"],
            ["MinterAsync"],
        ]

    def test_query_without_one_of_has_no_functions(self):
        contract = ContractSchema.from_dict({"query": {"type": "object"}, "responses": {}})
        ir = ContractAnalyzer(CodeGeneratorConfig()).analyze(contract, "ITest", "")
        assert ir.functions == []
        assert ir.declarations == []


class TestParameters:
    ALL_ALLOWANCES = _operation(
        "all_allowances",
        {
            "limit": {"type": ["integer", "null"]},
            "owner": {"type": "string"},
            "start_after": {"type": ["string", "null"]},
        },
        required=["owner"],
    )

    def test_required_parameters_come_first(self):
        ir = _analyze([self.ALL_ALLOWANCES], {"all_allowances": {"type": "string"}})

        parameters = ir.functions[0].parameters
        assert [(p.name, p.has_default) for p in parameters] == [
            ("owner", False),
            ("limit", True),
            ("start_after", True),
        ]
        assert parameters[1].type_ref == _primitive("integer", nullable=True)

    def test_required_nullable_parameter_keeps_default_when_trailing(self):
        ir = _analyze(
            [_operation("find", {"key": {"type": "string"}, "hint": {"type": ["string", "null"]}}, required=["key", "hint"])],
            {"find": {"type": "string"}},
        )
        assert [(p.name, p.has_default) for p in ir.functions[0].parameters] == [("key", False), ("hint", True)]

    def test_default_is_dropped_before_a_parameter_without_default(self):
        ir = _analyze(
            [_operation("find", {"hint": {"type": ["string", "null"]}, "key": {"type": "string"}}, required=["hint", "key"])],
            {"find": {"type": "string"}},
        )

        hint, key = ir.functions[0].parameters
        assert (hint.name, hint.has_default, hint.type_ref) == ("hint", False, _primitive("string", nullable=True))
        assert (key.name, key.has_default) == ("key", False)

    def test_body_statements(self):
        ir = _analyze([self.ALL_ALLOWANCES], {"all_allowances": {"type": "string"}})

        assert ir.functions[0].body == [
            InitRequest(operation="all_allowances"),
            AddRequestField(json_name="owner", parameter="owner"),
            AddRequestField(json_name="limit", parameter="limit"),
            AddRequestField(json_name="start_after", parameter="start_after"),
            EncodeRequest(),
            QueryContract(),
            DecodeResponse(type_ref=_primitive("string")),
            ReturnResponse(),
        ]

    def test_zero_argument_query(self):
        ir = _analyze([_operation("minter", description="Returns who can mint")], {"minter": {"type": "string"}})

        function = ir.functions[0]
        assert function.parameters == []
        assert function.description == "Returns who can mint"
        assert function.body[0] == InitRequest(operation="minter")
        assert len(function.body) == 5

    def test_arguments_behind_a_reference(self):
        query = {
            "oneOf": [
                {
                    "type": "object",
                    "required": ["config"],
                    "properties": {"config": {"$ref": "#/definitions/ConfigQuery"}},
                }
            ],
            "definitions": {
                "ConfigQuery": {"type": "object", "properties": {"verbose": {"type": ["boolean", "null"]}}},
            },
        }
        contract = ContractSchema.from_dict({"query": query, "responses": {"config": {"type": "string"}}})

        ir = ContractAnalyzer(CodeGeneratorConfig()).analyze(contract, "ITest", "")

        assert [(p.name, p.has_default) for p in ir.functions[0].parameters] == [("verbose", True)]


class TestResponses:
    def test_response_root_is_named_after_the_operation(self):
        response = {"type": "object", "required": ["amount"], "properties": {"amount": {"type": "string"}}}
        ir = _analyze([_operation("balance")], {"balance": response})

        assert ir.functions[0].return_type == TypeRef(kind=TypeKind.OBJECT, name="BalanceResponse")
        assert [d.name for d in ir.declarations] == ["BalanceResponse"]

    def test_nullable_response(self):
        response = {
            "anyOf": [{"$ref": "#/definitions/MinterResponse"}, {"type": "null"}],
            "definitions": {
                "MinterResponse": {"type": "object", "properties": {"minter": {"type": "string"}}},
            },
        }
        ir = _analyze([_operation("minter")], {"minter": response})

        assert ir.functions[0].return_type == TypeRef(kind=TypeKind.OBJECT, name="MinterResponse", is_nullable=True)

    def test_function_suffix_is_configurable(self):
        config = CodeGeneratorConfig(function_suffix="")
        ir = _analyze([_operation("token_info")], {"token_info": {"type": "string"}}, config=config)
        assert ir.functions[0].name == "TokenInfo"


class TestErrors:
    def test_missing_response(self):
        with pytest.raises(MissingResponseSchema) as exc_info:
            _analyze([_operation("balance")], {})
        assert exc_info.value.operation == "balance"
        assert "balance" in str(exc_info.value)

    def test_branch_with_two_operations(self):
        branch = {
            "type": "object",
            "properties": {"balance": {"type": "object"}, "minter": {"type": "object"}},
        }
        with pytest.raises(MalformedOperationSchema):
            _analyze([branch], {"balance": {"type": "string"}, "minter": {"type": "string"}})

    def test_arguments_must_be_an_object(self):
        branch = {"type": "object", "properties": {"balance": {"type": "string"}}}
        with pytest.raises(MalformedOperationSchema):
            _analyze([branch], {"balance": {"type": "string"}})

    def test_unsupported_parameter_aborts_compilation(self):
        with pytest.raises(UnsupportedSchemaConstruct):
            _analyze([_operation("balance", {"address": {"type": "null"}})], {"balance": {"type": "string"}})


@pytest.mark.parametrize(
    "interface, expected",
    [
        ("ICw20", "Cw20"),
        ("Cw20Api", "Cw20ApiImplementation"),
        ("Item", "ItemImplementation"),
        ("I", "IImplementation"),
    ],
)
def test_class_name_for(interface, expected):
    assert ContractAnalyzer(CodeGeneratorConfig()).class_name_for(interface) == expected


def test_interface_and_class_names_are_reserved():
    response = {"title": "Cw20", "type": "object", "properties": {"amount": {"type": "string"}}}
    ir = _analyze([_operation("balance")], {"balance": response}, interface="ICw20")

    assert ir.class_name == "Cw20"
    assert ir.functions[0].return_type.name == "Response0"
