"""
Shared ids, schema and seed data for the test-suite.

The seeded store has English as the system default language and German
as a second language. French and Austrian German exist only as locales.
"""
from sqlalchemy import column, insert, select, table, text

SYSTEM_LANGUAGE_ID = bytes.fromhex("2fbb5fe2e29a4d70aa5854ce7ce3e20b")
GERMAN_LANGUAGE_ID = bytes.fromhex("20" * 16)

EN_GB = bytes.fromhex("01" * 16)
DE_DE = bytes.fromhex("02" * 16)
FR_FR = bytes.fromhex("03" * 16)
DE_AT = bytes.fromhex("04" * 16)

PRODUCT_1 = bytes.fromhex("31" * 16)
PRODUCT_2 = bytes.fromhex("32" * 16)
PRODUCT_3 = bytes.fromhex("33" * 16)
CATEGORY = bytes.fromhex("41" * 16)
CATEGORY_VERSION = bytes.fromhex("42" * 16)
SALES_CHANNEL = bytes.fromhex("51" * 16)
CUSTOMER_1 = bytes.fromhex("61" * 16)
CUSTOMER_2 = bytes.fromhex("62" * 16)

# SQLite storage format of SQLAlchemy DateTime
CREATED_AT = "2024-01-01 00:00:00.000000"

# Tables an application adds on top of the language schema
SAMPLE_SCHEMA = [
    "CREATE TABLE product (id BLOB PRIMARY KEY)",
    """CREATE TABLE product_translation (
        product_id BLOB NOT NULL REFERENCES product(id),
        language_id BLOB NOT NULL REFERENCES language(id),
        name VARCHAR(255),
        description TEXT,
        PRIMARY KEY (product_id, language_id)
    )""",
    """CREATE TABLE category (
        id BLOB NOT NULL,
        version_id BLOB NOT NULL,
        PRIMARY KEY (id, version_id)
    )""",
    """CREATE TABLE category_translation (
        category_id BLOB NOT NULL,
        category_version_id BLOB NOT NULL,
        language_id BLOB NOT NULL,
        name VARCHAR(255),
        breadcrumb TEXT,
        PRIMARY KEY (category_id, category_version_id, language_id),
        FOREIGN KEY (category_id, category_version_id) REFERENCES category(id, version_id),
        FOREIGN KEY (language_id) REFERENCES language(id)
    )""",
    """CREATE TABLE sales_channel_language (
        sales_channel_id BLOB NOT NULL,
        language_id BLOB NOT NULL REFERENCES language(id),
        PRIMARY KEY (sales_channel_id, language_id)
    )""",
    """CREATE TABLE customer (
        id BLOB PRIMARY KEY,
        language_id BLOB NOT NULL REFERENCES language(id),
        email VARCHAR(255)
    )""",
]

TABLES = [
    "locale",
    "language",
    "locale_translation",
    "product",
    "product_translation",
    "category",
    "category_translation",
    "sales_channel_language",
    "customer",
]


def _insert(connection, table_name, rows):
    columns = rows[0].keys()
    connection.execute(insert(table(table_name, *[column(name) for name in columns])), rows)


def create_sample_schema(connection):
    for statement in SAMPLE_SCHEMA:
        connection.execute(text(statement))


def seed(connection):
    _insert(connection, "locale", [
        {"id": EN_GB, "code": "en-GB", "created_at": CREATED_AT},
        {"id": DE_DE, "code": "de-DE", "created_at": CREATED_AT},
        {"id": FR_FR, "code": "fr-FR", "created_at": CREATED_AT},
        {"id": DE_AT, "code": "de-AT", "created_at": CREATED_AT},
    ])
    _insert(connection, "language", [
        {"id": SYSTEM_LANGUAGE_ID, "parent_id": None, "locale_id": EN_GB,
         "translation_code_id": EN_GB, "name": "English", "created_at": CREATED_AT},
        {"id": GERMAN_LANGUAGE_ID, "parent_id": None, "locale_id": DE_DE,
         "translation_code_id": DE_DE, "name": "Deutsch", "created_at": CREATED_AT},
    ])
    _insert(connection, "locale_translation", [
        {"locale_id": EN_GB, "language_id": SYSTEM_LANGUAGE_ID, "name": "English", "territory": "United Kingdom", "created_at": CREATED_AT},
        {"locale_id": DE_DE, "language_id": SYSTEM_LANGUAGE_ID, "name": "German", "territory": "Germany", "created_at": CREATED_AT},
        {"locale_id": FR_FR, "language_id": SYSTEM_LANGUAGE_ID, "name": "French", "territory": "France", "created_at": CREATED_AT},
        {"locale_id": DE_AT, "language_id": SYSTEM_LANGUAGE_ID, "name": "German", "territory": "Austria", "created_at": CREATED_AT},
        {"locale_id": DE_DE, "language_id": GERMAN_LANGUAGE_ID, "name": "Deutsch", "territory": None, "created_at": CREATED_AT},
    ])
    _insert(connection, "product", [{"id": PRODUCT_1}, {"id": PRODUCT_2}, {"id": PRODUCT_3}])
    _insert(connection, "product_translation", [
        # only the default language
        {"product_id": PRODUCT_1, "language_id": SYSTEM_LANGUAGE_ID, "name": "Hello", "description": None},
        # both languages, German incomplete
        {"product_id": PRODUCT_2, "language_id": SYSTEM_LANGUAGE_ID, "name": "Hello", "description": "Text"},
        {"product_id": PRODUCT_2, "language_id": GERMAN_LANGUAGE_ID, "name": "Hallo", "description": None},
        # only German
        {"product_id": PRODUCT_3, "language_id": GERMAN_LANGUAGE_ID, "name": "Nur Deutsch", "description": "Beschreibung"},
    ])
    _insert(connection, "category", [{"id": CATEGORY, "version_id": CATEGORY_VERSION}])
    _insert(connection, "category_translation", [
        {"category_id": CATEGORY, "category_version_id": CATEGORY_VERSION, "language_id": SYSTEM_LANGUAGE_ID,
         "name": "Shoes", "breadcrumb": "Home > Shoes"},
        {"category_id": CATEGORY, "category_version_id": CATEGORY_VERSION, "language_id": GERMAN_LANGUAGE_ID,
         "name": "Schuhe", "breadcrumb": None},
    ])
    _insert(connection, "sales_channel_language", [
        {"sales_channel_id": SALES_CHANNEL, "language_id": SYSTEM_LANGUAGE_ID},
        {"sales_channel_id": SALES_CHANNEL, "language_id": GERMAN_LANGUAGE_ID},
    ])
    _insert(connection, "customer", [
        {"id": CUSTOMER_1, "language_id": SYSTEM_LANGUAGE_ID, "email": "jane@example.com"},
        {"id": CUSTOMER_2, "language_id": GERMAN_LANGUAGE_ID, "email": "max@example.com"},
    ])


def fetch_rows(connection, table_name):
    """All rows of a table as dicts, in a stable order."""
    rows = [dict(row) for row in connection.execute(text(f"SELECT * FROM {table_name}")).mappings()]
    return sorted(rows, key=lambda row: sorted((k, repr(v)) for k, v in row.items()))


def snapshot(engine):
    """Every row of every table, for before/after comparisons."""
    with engine.connect() as connection:
        return {name: fetch_rows(connection, name) for name in TABLES}


def translation(connection, table_name, language_id, **keys):
    """The translation row of one entity in one language, or None."""
    target = table(table_name, column("language_id"), *[column(name) for name in keys])
    statement = select(text("*")).select_from(target).where(target.c.language_id == language_id)
    for name, value in keys.items():
        statement = statement.where(target.c[name] == value)
    row = connection.execute(statement).mappings().first()
    return dict(row) if row else None
