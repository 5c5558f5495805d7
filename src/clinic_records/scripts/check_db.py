"""
Check the database connection and list tables.
Run with: python -m clinic_records.scripts.check_db
"""
import sys
from sqlalchemy import func, inspect, select
from sqlalchemy.exc import SQLAlchemyError
from clinic_records.core.db import get_engine
from clinic_records.models.tables import Base

def main() -> int:
    try:
        engine = get_engine()
        insp = inspect(engine)

        print("Database Connection: SUCCESS\n")
        print("Tables in database:")

        tables = insp.get_table_names()
        if not tables:
            print("  No tables found")
        with engine.connect() as conn:
            for name in tables:
                table = Base.metadata.tables.get(name)
                if table is None:
                    print(f"  - {name}: (not a clinic table)")
                    continue
                count = conn.execute(select(func.count()).select_from(table)).scalar_one()
                print(f"  - {name}: {count} rows")
        return 0

    except SQLAlchemyError as e:
        print("Database Connection: FAILED")
        print(f"Error: {e}")
        return 1

if __name__ == "__main__":
    sys.exit(main())
