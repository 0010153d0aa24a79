from sqlalchemy import JSON, Numeric
from sqlalchemy.dialects.postgresql import JSONB

# object/array fields: JSONB on Postgres, plain JSON elsewhere (SQLite in tests)
JSONType = JSON().with_variant(JSONB(), "postgresql")

# Money: two decimal places, handed back as float like the other numbers
Money = Numeric(12, 2, asdecimal=False)
