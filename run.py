# /run.py
import os
import atexit

# Load environment variables from .env file
from dotenv import load_dotenv
load_dotenv()

# Now, import the app factory
from healthchain import create_app
from healthchain.services import get_healthchain

# Create the app instance
app = create_app(os.getenv('HEALTHCHAIN_CONFIG'))


@atexit.register
def shutdown():
    with app.app_context():
        get_healthchain().close()


if __name__ == '__main__':
    port = int(os.getenv('PORT', 4000))
    print(f"HealthChain backend running on port {port}")
    app.run(host='127.0.0.1', port=port, debug=app.config.get('DEBUG', False))
