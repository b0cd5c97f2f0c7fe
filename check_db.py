import sys
from app.db.session import DatabaseError, check_connection

def run_db_conn_test():
    try:
        check_connection()
    except DatabaseError as e:
        print(f"Database connection failed: {e}")
        sys.exit(1)
    print("Database connection OK")
    sys.exit(0)

if __name__ == "__main__":
    run_db_conn_test()
