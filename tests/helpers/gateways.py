"""Table-specific gateways and row classes used across the test suite."""

from sql_table_gateway import ColumnType, RowObject, TableGateway

POSTS_SCHEMA = """
    create table posts (
        id integer primary key autoincrement,
        title text unique,
        body text,
        views integer,
        rating real,
        published integer,
        created_by integer,
        created_date text,
        updated_by integer,
        updated_date text
    )
"""


class Post(RowObject):
    """Row class with its own column types and a derived property."""

    column_types = {"views": ColumnType.INTEGER}

    @property
    def summary(self):
        return (self.get("body") or "")[:10]


class PostGateway(TableGateway):
    definition = {
        "table": "posts",
        "table_alias": "p",
        "modifiable_columns": ["title", "body", "views", "rating", "published"],
        "column_types": {
            "title": "string",
            "body": "string",
            "rating": "real",
            "published": "boolean",
        },
        "row_class": Post,
    }

    def find_published(self):
        self.make_select()
        self.sql += " and p.published = ? order by p.id"
        self.bind_values.append(1)
        return self.find()
