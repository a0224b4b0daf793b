#!/usr/bin/env python3
"""
Basic usage examples for the SQL table gateway.

This example demonstrates:
1. Setting up configuration
2. Declaring a table gateway with a custom row class and finder
3. Inserting, reading, updating and deleting rows
4. Counting matches alongside a limited query
5. Telling a failed write from a write with nothing to do
"""

import logging
import sqlite3

from sql_table_gateway import (
    ColumnType,
    GatewayConfig,
    Outcome,
    RowObject,
    TableGateway,
)


class Article(RowObject):
    column_types = {"word_count": ColumnType.INTEGER}

    @property
    def is_long(self):
        return (self.get("word_count") or 0) > 1000


class ArticleGateway(TableGateway):
    definition = {
        "table": "articles",
        "table_alias": "a",
        "modifiable_columns": ["title", "body", "word_count", "featured"],
        "column_types": {"featured": "boolean"},
        "row_class": Article,
    }

    def find_featured(self, limit=10):
        self.make_select(found_rows=True)
        self.sql += " and a.featured = ? order by a.id limit ?"
        self.bind_values.extend([1, limit])
        return self.find()


def create_schema(connection):
    connection.execute(
        """
        create table articles (
            id integer primary key autoincrement,
            title text unique,
            body text,
            word_count integer,
            featured integer,
            created_by integer,
            created_date text,
            updated_by integer,
            updated_date text
        )
        """
    )
    connection.commit()


def main():
    """Demonstrate basic usage of the table gateway."""
    logging.basicConfig(level=logging.DEBUG)

    # 1. Configure the gateway session
    print("1. Setting up gateway configuration...")
    config = GatewayConfig.for_actor(1, dialect="sqlite")

    # For local development with statement logging, you might use:
    # config = GatewayConfig.for_local_development()

    connection = sqlite3.connect(":memory:")
    create_schema(connection)

    # 2. Create the gateway over a DB-API connection
    print("2. Creating article gateway...")
    articles = ArticleGateway(connection, config=config)

    # 3. Insert and read back
    print("3. Inserting articles...")
    for index in range(1, 4):
        article = articles.make()
        article.title = f"Article {index}"
        article.word_count = str(index * 600)
        article.featured = index != 2
        articles.insert(article)
        print(f"   Inserted #{article.identifier} at {article.created_date}")

    article = articles.find_by_id(3)
    print(f"   Found: {article.title} (long: {article.is_long})")

    # Only assigned columns are written
    article.body = "Rewritten body"
    articles.update(article)
    print(f"   Updated by {article.updated_by} at {article.updated_date}")

    # 4. Custom finder with a total match count
    print("4. Finding featured articles...")
    featured = articles.find_featured(limit=1)
    print(f"   Showing {len(featured)} of {articles.found_rows_count()} featured articles")

    # 5. Outcomes
    print("5. Checking outcomes...")
    if articles.insert(articles.make()) is None and articles.last_outcome is Outcome.NOTHING_TO_WRITE:
        print("   Nothing to insert for an empty row")

    duplicate = articles.make()
    duplicate.title = "Article 1"
    if articles.insert(duplicate) is None and articles.last_outcome is Outcome.FAILED:
        print(f"   Duplicate rejected: {articles.last_error}")

    articles.delete(article)
    print(f"   Remaining articles: {len(articles.find())}")

    connection.close()


if __name__ == "__main__":
    main()
