import logging
from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import HTTPException
from config import Config

logger = logging.getLogger(__name__)

app = Flask(__name__)
app.config.from_object(Config)

# Initialize extensions
CORS(app)

# Error handlers
@app.errorhandler(HTTPException)
def handle_http_error(error):
    return jsonify({'status': 'error', 'error': error.description}), error.code

@app.errorhandler(Exception)
def handle_error(error):
    logger.error("Unhandled error: %s", error, exc_info=True)
    return jsonify({
        'status': 'error',
        'error': str(error),
        'error_type': type(error).__name__,
    }), 500

# Register routes
from routes import init_routes
init_routes(app)

if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO)
    app.run(debug=True, host='0.0.0.0', port=5000, use_reloader=False)
