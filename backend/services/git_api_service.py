import base64
import binascii
import logging
from typing import Dict, List, Optional, Tuple

import requests

from config import Config
from services.errors import ContentDecodeError, UpstreamError, ValidationError

logger = logging.getLogger(__name__)


class GitApiService:
    """Service for listing and reading source files of a GitHub repository via API"""

    def __init__(self, api_base: str = None, timeout: int = None,
                 extension: str = None, default_token: str = None):
        self.api_base = (api_base or Config.GITHUB_API_BASE).rstrip('/')
        self.timeout = timeout or Config.GITHUB_TIMEOUT
        self.extension = extension or Config.TARGET_EXTENSION
        self.default_token = default_token if default_token is not None else Config.GITHUB_TOKEN

    def _headers(self, token: Optional[str]) -> Dict:
        headers = {'Accept': 'application/vnd.github.v3+json'}
        token = token or self.default_token
        if token:
            headers['Authorization'] = f'token {token}'
        return headers

    @staticmethod
    def split_repo_url(repo_url: str) -> Tuple[str, str]:
        """
        Take owner and repository name from the last two path segments.
        Handles:
          - https://github.com/owner/repo
          - https://github.com/owner/repo.git
          - https://github.com/owner/repo/
        """
        if not repo_url or not isinstance(repo_url, str):
            raise ValidationError('Repository URL is required')

        segments = [s for s in repo_url.strip().rstrip('/').split('/') if s]
        if len(segments) < 2:
            raise ValidationError(
                f'Invalid repository URL: {repo_url}. Expected format: github.com/owner/repo')

        owner = segments[-2]
        repo = segments[-1].removesuffix('.git')
        if not repo or owner.endswith(':'):
            raise ValidationError(
                f'Invalid repository URL: {repo_url}. Expected format: github.com/owner/repo')
        return owner, repo

    def _get_json(self, url: str, token: Optional[str], what: str):
        try:
            response = requests.get(url, headers=self._headers(token), timeout=self.timeout)
        except requests.exceptions.Timeout:
            raise UpstreamError(f'GitHub API request timed out while fetching {what}')
        except requests.exceptions.ConnectionError:
            raise UpstreamError('Could not connect to GitHub. Check your internet connection.')
        except requests.exceptions.RequestException as e:
            raise UpstreamError(f'GitHub API request failed: {str(e)}')

        if not 200 <= response.status_code < 300:
            message = None
            try:
                body = response.json()
                if isinstance(body, dict):
                    message = body.get('message')
            except ValueError:
                pass

            if response.status_code == 403:
                remaining = response.headers.get('X-RateLimit-Remaining', 'unknown')
                message = message or f'GitHub API rate limit reached (remaining: {remaining})'

            logger.warning("GitHub returned HTTP %s for %s", response.status_code, what)
            raise UpstreamError(
                f'GitHub API error (HTTP {response.status_code}) fetching {what}: '
                f'{message or response.reason}',
                upstream_status=response.status_code
            )

        try:
            return response.json()
        except ValueError:
            raise UpstreamError(f'GitHub API returned an unreadable response for {what}',
                                upstream_status=response.status_code)

    def get_default_branch(self, owner: str, repo: str, token: str = None) -> str:
        data = self._get_json(f"{self.api_base}/repos/{owner}/{repo}", token,
                              f'repository {owner}/{repo}')
        if not isinstance(data, dict):
            raise UpstreamError(f'Unexpected GitHub response for repository {owner}/{repo}')
        return data.get('default_branch') or 'main'

    def list_source_files(self, repo_url: str, token: str = None) -> List[Dict]:
        """
        List every blob on the default branch whose path ends with the target extension.

        Returns: [{path, type, size, blobId}] in tree order
        """
        owner, repo = self.split_repo_url(repo_url)
        branch = self.get_default_branch(owner, repo, token)

        data = self._get_json(
            f"{self.api_base}/repos/{owner}/{repo}/git/trees/{branch}?recursive=1",
            token, f'tree of {owner}/{repo}@{branch}'
        )
        if not isinstance(data, dict) or not isinstance(data.get('tree', []), list):
            raise UpstreamError(f'Unexpected GitHub response for tree of {owner}/{repo}')
        if data.get('truncated'):
            logger.warning("Tree listing for %s/%s was truncated by GitHub", owner, repo)

        files = []
        for item in data.get('tree', []):
            if not isinstance(item, dict):
                continue
            path = item.get('path', '')
            if item.get('type') != 'blob' or not isinstance(path, str) or not path.endswith(self.extension):
                continue
            files.append({
                'path': path,
                'type': item['type'],
                'size': item.get('size', 0),
                'blobId': item.get('sha')
            })

        logger.info("Listed %d %s files in %s/%s@%s", len(files), self.extension, owner, repo, branch)
        return files

    def get_file_content(self, owner: str, repo: str, path: str,
                         token: str = None, ref: str = None) -> str:
        """Fetch a single file and decode its base64 payload to text"""
        url = f"{self.api_base}/repos/{owner}/{repo}/contents/{path}"
        if ref:
            url += f"?ref={ref}"

        data = self._get_json(url, token, f'file {path}')
        if not isinstance(data, dict) or not isinstance(data.get('content'), str):
            raise ContentDecodeError(f'No file content returned for {path}')
        if data.get('encoding') == 'none':
            # GitHub omits the payload for files over 1 MB
            raise ContentDecodeError(f'File too large to fetch through the contents API: {path}')

        try:
            return base64.b64decode(data['content']).decode('utf-8')
        except (binascii.Error, ValueError) as e:
            # UnicodeDecodeError is a ValueError
            raise ContentDecodeError(f'Could not decode {path}: {str(e)}')

    def fetch_repo_file(self, repo_url: str, path: str, token: str = None) -> str:
        owner, repo = self.split_repo_url(repo_url)
        return self.get_file_content(owner, repo, path, token)
