import logging

from flask import Blueprint, jsonify

from config import Config
from routes import get_json_body, get_session, require_fields
from services.classifier_service import ClassifierService
from services.errors import ValidationError
from services.git_api_service import GitApiService
from services.llm_client import LLMClient
from services.repository_analysis_service import RepositoryAnalysisService

logger = logging.getLogger(__name__)

repository_bp = Blueprint('repository', __name__)


def _access_token(data):
    token = data.get('accessToken') or data.get('pat') or Config.GITHUB_TOKEN
    if not token:
        raise ValidationError('Missing required fields: accessToken')
    return token


@repository_bp.route('/repository', methods=['POST'])
def list_repository_files():
    """
    List the repository's source files on its default branch.

    Request Body:
        {"repoUrl": "https://github.com/owner/repo", "accessToken": "ghp_..."}

    Returns:
        {"success": true, "files": [{"path", "type", "size", "blobId"}]}
    """
    data = get_json_body()
    require_fields(data, 'repoUrl')
    token = _access_token(data)

    files = GitApiService().list_source_files(data['repoUrl'], token)
    return jsonify({'success': True, 'files': files}), 200


@repository_bp.route('/file-content', methods=['POST'])
def get_file_content():
    """Fetch one file's decoded text: {repoUrl, accessToken, path} -> {success, path, content}"""
    data = get_json_body()
    require_fields(data, 'repoUrl', 'path')
    token = _access_token(data)

    content = GitApiService().fetch_repo_file(data['repoUrl'], data['path'], token)
    return jsonify({'success': True, 'path': data['path'], 'content': content}), 200


@repository_bp.route('/repository/analyze', methods=['POST'])
def analyze_repository():
    """
    Start a new session: list, fetch and classify every source file.

    Files that fail to fetch or classify come back with classification "error";
    only a failed listing fails the request.
    """
    data = get_json_body()
    require_fields(data, 'repoUrl')
    token = _access_token(data)

    service = RepositoryAnalysisService(
        git_service=GitApiService(),
        classifier=ClassifierService(LLMClient.from_config()),
        session=get_session()
    )
    records = service.analyze_repository(data['repoUrl'], token)

    return jsonify({
        'success': True,
        'repoUrl': data['repoUrl'],
        'files': [record.to_dict() for record in records]
    }), 200


@repository_bp.route('/session/files', methods=['GET'])
def get_session_files():
    """Files classified by the most recent repository analysis"""
    session = get_session()
    return jsonify({'success': True, **session.to_dict()}), 200
