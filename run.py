from givetrack import create_app
import os

app = create_app()

if __name__ == "__main__":
    port = int(os.getenv("PORT", 5050))
    app.run(host="127.0.0.1", port=port, debug=False, use_reloader=False)

# --- LOCAL ---

# Bring up postgres
# docker compose --env-file .env.docker up -d

# Apply migrations, then seed demo data
# poetry run alembic upgrade head
# poetry run python scripts/seed.py

# Start the API
# PORT=5050 poetry run python run.py
# or: poetry run flask --app givetrack:create_app --debug run

# Stop with Ctrl+C, then:
# docker compose --env-file .env.docker down
