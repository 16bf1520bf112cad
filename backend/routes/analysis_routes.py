import logging

from flask import Blueprint, jsonify

from models import FileRecord
from routes import get_json_body, get_session, require_fields
from services.classifier_service import ClassifierService
from services.errors import ValidationError
from services.llm_client import LLMClient
from services.logic_analyzer_service import LogicAnalyzerService
from services.report_service import build_report
from services.test_generator_service import TestGeneratorService
from services.test_runner_service import TestRunnerService

logger = logging.getLogger(__name__)

analysis_bp = Blueprint('analysis', __name__)


def _file_records(data):
    files = data.get('files')
    if not files or not isinstance(files, list):
        raise ValidationError('No files provided for analysis')
    for index, f in enumerate(files):
        if not isinstance(f, dict):
            raise ValidationError('Each file must be an object with path, content and classification')
        if not isinstance(f.get('path'), str) or not f['path']:
            raise ValidationError(f'File {index}: path must be a non-empty string')
        if f.get('content') is not None and not isinstance(f['content'], str):
            raise ValidationError(f'File {index}: content must be a string')
        size = f.get('size')
        if size is not None and (isinstance(size, bool) or not isinstance(size, int)):
            raise ValidationError(f'File {index}: size must be an integer')
    return [FileRecord.from_dict(f) for f in files]


@analysis_bp.route('/classify', methods=['POST'])
def classify_file():
    """
    Classify one file as logic or boilerplate.

    Request Body:
        {"fileContent": "..."}

    Returns:
        {"success": true, "classification": "logic"|"boilerplate", "analysis": "<model text>"}
    """
    data = get_json_body()
    require_fields(data, 'fileContent')

    result = ClassifierService(LLMClient.from_config()).classify(data['fileContent'])
    return jsonify({'success': True, **result}), 200


@analysis_bp.route('/generate-test', methods=['POST'])
def generate_test():
    """{fileContent, fileName} -> {success, testCode}"""
    data = get_json_body()
    require_fields(data, 'fileContent', 'fileName')

    test_code = TestGeneratorService(LLMClient.from_config()).generate(
        data['fileContent'], data['fileName'])
    return jsonify({'success': True, 'testCode': test_code}), 200


@analysis_bp.route('/run-test', methods=['POST'])
def run_test():
    """
    Run generated tests in the sandbox.

    Always answers 200 with a TestRunResult-shaped body; when the sandbox is
    unavailable the result carries local-run instructions instead.
    """
    data = get_json_body()
    require_fields(data, 'testCode', 'fileName')

    result = TestRunnerService().run_test_code(
        data['testCode'], data['fileName'], data.get('sourceCode') or '')
    return jsonify({'success': True, 'results': result.to_dict()}), 200


@analysis_bp.route('/analyze-logic', methods=['POST'])
def analyze_logic():
    """
    Aggregate logic analysis across the posted files.

    Request Body:
        {"files": [{"path", "content", "classification"}]}

    Returns:
        {"success": true, "results": {...aggregate...}}
        results.success is false when no file could be analyzed.
    """
    data = get_json_body()
    files = _file_records(data)

    results = LogicAnalyzerService(LLMClient.from_config()).analyze_logic_files(files)
    return jsonify({'success': True, 'results': results}), 200


@analysis_bp.route('/report', methods=['POST'])
def create_report():
    """Report data for the posted files: {repoUrl, files} -> {success, report}"""
    data = get_json_body()
    files = _file_records(data)
    return jsonify({'success': True, 'report': build_report(files, data.get('repoUrl'))}), 200


@analysis_bp.route('/report', methods=['GET'])
def get_session_report():
    """Report data for the current session"""
    session = get_session()
    if session.is_empty():
        return jsonify({
            'success': False,
            'error': 'No repository has been analyzed in this session'
        }), 404
    return jsonify({'success': True, 'report': build_report(session.records(), session.repo_url)}), 200


@analysis_bp.route('/health', methods=['GET'])
def health():
    """
    Check which outbound services are configured.

    Returns:
        {"status": "ok", "model_configured": bool, "sandbox_configured": bool}
    """
    return jsonify({
        'status': 'ok',
        'model_configured': LLMClient.from_config().is_configured(),
        'sandbox_configured': bool(TestRunnerService().sandbox_url)
    }), 200
