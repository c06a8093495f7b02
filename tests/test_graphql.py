"""Tests for the GraphQL SDL and operations renderer."""

import pytest

from schemagen_cli.database.models import ColumnSchema, SemanticType, TableSchema
from schemagen_cli.errors import RenderError
from schemagen_cli.options import RenderOptions
from schemagen_cli.render import GraphQLRenderer
from schemagen_cli.render.naming import camel_case, capitalize, normalize_table_name


class TestNaming:
    """Test identifier helpers."""

    @pytest.mark.parametrize("table,expected", [
        ("cad_user", "User"),
        ("app_order_item", "OrderItem"),
        ("users", "Users"),
        ("shop_order", "Order"),
    ])
    def test_normalize_table_name(self, table, expected):
        """Test the leading segment is dropped and the rest PascalCased."""
        assert normalize_table_name(table) == expected

    @pytest.mark.parametrize("value,expected", [
        ("created_at", "createdAt"),
        ("user_id", "userId"),
        ("Created-At", "createdAt"),
        ("createdAt", "createdAt"),
        ("HTTPStatus", "httpStatus"),
        ("address1", "address1"),
    ])
    def test_camel_case(self, value, expected):
        """Test camelCase conversion."""
        assert camel_case(value) == expected

    def test_capitalize(self):
        """Test capitalize lowercases the rest."""
        assert capitalize("userNAME") == "Username"
        assert capitalize("") == ""


class TestObjectTypes:
    """Test per-table SDL."""

    def test_users_type(self, users_table):
        """Test scalar mapping and nullability suffixes."""
        text = GraphQLRenderer().render([users_table])["users.graphql"]
        assert text == (
            "type Users {\n"
            "\tid: ID!\n"
            "\temail: String!\n"
            "\tstatus: String!\n"
            "\tbalance: String\n"
            "\tcreated_at: String!\n"
            "}\n"
        )

    def test_foreign_key_and_boolean(self, orders_table):
        """Test foreign keys become ID and booleans Boolean."""
        text = GraphQLRenderer().render([orders_table])["shop_order.graphql"]
        assert "type Order {" in text
        assert "\tuser_id: ID!\n" in text
        assert "\tcoupon_code: String\n" in text
        assert "\tpaid: Boolean!\n" in text

    def test_camel_case_foreign_key(self, orders_table):
        """Test camelCased foreign key fields."""
        text = GraphQLRenderer(RenderOptions(camel_case=True)).render([orders_table])["shop_order.graphql"]
        assert "\tuserId: ID!\n" in text
        assert "\tcouponCode: String\n" in text

    def test_integer_and_id_named_columns(self):
        """Test integers render Int and ID-named columns ID!."""
        table = TableSchema("app_counter", (
            ColumnSchema("ID", "INTEGER", SemanticType.INTEGER, nullable=True),
            ColumnSchema("hits", "INTEGER", SemanticType.INTEGER, nullable=False),
            ColumnSchema("misses", "BIGINT", SemanticType.INTEGER, nullable=True),
        ))
        node = GraphQLRenderer().build_table(table)
        assert [f.declaration for f in node.fields] == ["ID: ID!", "hits: Int!", "misses: Int"]
        assert [f.name for f in node.attrs] == ["hits", "misses"]


class TestOperations:
    """Test the root Query and Mutation types."""

    def test_operations(self, users_table, orders_table):
        """Test list/get queries and create/update/delete mutations."""
        text = GraphQLRenderer(RenderOptions(use_spaces=True, indentation=2)).render(
            [users_table, orders_table]
        )["operations.graphql"]
        assert text == (
            "type Query {\n"
            "  userss: [Users!]!\n"
            "  users(id: ID!): Users\n"
            "  orders: [Order!]!\n"
            "  order(id: ID!): Order\n"
            "}\n"
            "\n"
            "type Mutation {\n"
            "  createUsers(email: String!, status: String!, balance: String, created_at: String!): Users!\n"
            "  updateUsers(id: ID!, email: String!, status: String!, balance: String, created_at: String!): [Int!]!\n"
            "  deleteUsers(id: ID!): Int!\n"
            "  createOrder(coupon_code: String, paid: Boolean!): Order!\n"
            "  updateOrder(id: ID!, coupon_code: String, paid: Boolean!): [Int!]!\n"
            "  deleteOrder(id: ID!): Int!\n"
            "}\n"
        )

    def test_no_attrs_has_no_dangling_separator(self):
        """Test a table with only key columns."""
        table = TableSchema("app_link", (
            ColumnSchema("id", "INTEGER", SemanticType.INTEGER, nullable=False, is_primary_key=True),
        ))
        text = GraphQLRenderer(RenderOptions(use_spaces=True, indentation=2)).render([table])["operations.graphql"]
        assert "  createLink: Link!\n" in text
        assert "  updateLink(id: ID!): [Int!]!\n" in text
        assert "(, " not in text and ", )" not in text

    def test_files(self, users_table, orders_table):
        """Test one type file per table plus the operations file."""
        files = GraphQLRenderer().render([users_table, orders_table])
        assert list(files) == ["users.graphql", "shop_order.graphql", "operations.graphql"]

    def test_table_named_operations(self):
        """Test a table whose type file would replace the operations file."""
        table = TableSchema("operations", (
            ColumnSchema("id", "INTEGER", SemanticType.INTEGER, nullable=False, is_primary_key=True),
        ))
        with pytest.raises(RenderError) as exc:
            GraphQLRenderer().render([table])
        assert exc.value.details["file"] == "operations.graphql"

    def test_deterministic(self, users_table, orders_table):
        """Test rendering twice gives identical text."""
        renderer = GraphQLRenderer()
        assert renderer.render([users_table, orders_table]) == renderer.render([users_table, orders_table])
