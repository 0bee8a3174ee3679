from contact_api import create_app
import os

app = create_app()

if __name__ == "__main__":
    port = int(os.getenv("PORT", 5050))
    app.run(
        host="127.0.0.1",
        port=port,
        debug=False,
        use_reloader=False,
    )

# Local run without a provider account (emails are only logged):
# EMAIL_PROVIDER=log PORT=5050 poetry run python run.py
#
# Or through the flask CLI:
# EMAIL_PROVIDER=log poetry run flask --app contact_api:create_app --debug run
#
# Smoke test against the running server:
# poetry run python scripts/test_api.py --base http://127.0.0.1:5050
