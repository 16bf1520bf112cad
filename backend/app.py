import logging

from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import HTTPException
from config import Config
from services.errors import AnalyzerError
from services.session_store import AnalysisSession

logging.basicConfig(
    level=getattr(logging, Config.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s %(levelname)s %(name)s: %(message)s'
)
logger = logging.getLogger(__name__)

app = Flask(__name__)
app.config.from_object(Config)

# Initialize extensions
CORS(app)
app.extensions['analysis_session'] = AnalysisSession()

# Error handlers
@app.errorhandler(AnalyzerError)
def handle_analyzer_error(error):
    logger.warning("%s: %s", type(error).__name__, error.message)
    body = {
        'success': False,
        'error': error.message,
        'error_type': type(error).__name__
    }
    upstream_status = getattr(error, 'upstream_status', None)
    if upstream_status:
        body['upstream_status'] = upstream_status
    return jsonify(body), error.status_code

@app.errorhandler(Exception)
def handle_error(error):
    logger.exception("Unhandled error: %s", error)
    return jsonify({
        'success': False,
        'error': str(error),
        'error_type': type(error).__name__
    }), 500

@app.errorhandler(HTTPException)
def handle_http_error(error):
    return jsonify({'success': False, 'error': error.description}), error.code

# Register routes
from routes import init_routes
init_routes(app)

if __name__ == '__main__':
    app.run(debug=True, host='0.0.0.0', port=5000, use_reloader=False)
