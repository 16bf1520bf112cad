"""
Derived presentation data: repository statistics and the exportable report.

Nothing here is a record of truth; every value is recomputed from the
FileRecords it is given.
"""
import math
from datetime import datetime, timezone
from typing import Dict, List

from models import FileRecord

REPORT_TITLE = 'C# Repository Analysis Report'
SIZE_UNITS = ['Bytes', 'KB', 'MB', 'GB']


def _percent(part: int, whole: int) -> int:
    if whole == 0:
        return 0
    return int(math.floor(part * 100 / whole + 0.5))


def format_file_size(size: int) -> str:
    """Human-readable size, e.g. 1536 -> '1.5 KB'"""
    if not size or size <= 0:
        return '0 Bytes'
    exponent = 0
    while size >= 1024 ** (exponent + 1) and exponent < len(SIZE_UNITS) - 1:
        exponent += 1
    value = round(size / (1024 ** exponent), 2)
    return f"{value:g} {SIZE_UNITS[exponent]}"


def build_statistics(files: List[FileRecord]) -> Dict:
    total = len(files)
    logic = sum(1 for f in files if f.classification == 'logic')
    boilerplate = sum(1 for f in files if f.classification == 'boilerplate')
    other = total - logic - boilerplate
    total_size = sum(f.size or 0 for f in files)
    average_size = int(math.floor(total_size / total + 0.5)) if total else 0

    return {
        'totalFiles': total,
        'logicFiles': logic,
        'boilerplateFiles': boilerplate,
        'errorFiles': other,
        'logicPercentage': _percent(logic, total),
        'boilerplatePercentage': _percent(boilerplate, total),
        'errorPercentage': _percent(other, total),
        'totalSize': total_size,
        'averageSize': average_size,
        'averageSizeDisplay': format_file_size(average_size)
    }


def report_file_name(repo_url: str) -> str:
    repo_name = (repo_url or '').rstrip('/').split('/')[-1] or 'repository'
    return f"{repo_name}-analysis-report.pdf"


def build_report(files: List[FileRecord], repo_url: str) -> Dict:
    """Everything a client needs to lay out the PDF export"""
    stats = build_statistics(files)
    return {
        'title': REPORT_TITLE,
        'repository': repo_url,
        'generatedAt': datetime.now(timezone.utc).isoformat(),
        'totalFiles': stats['totalFiles'],
        'classificationSummary': [
            ['Classification', 'Count', 'Percentage'],
            ['Logic', stats['logicFiles'], f"{stats['logicPercentage']}%"],
            ['Boilerplate', stats['boilerplateFiles'], f"{stats['boilerplatePercentage']}%"],
            ['Total', stats['totalFiles'], '100%']
        ],
        'files': [[index, f.path, f.classification or 'unknown']
                  for index, f in enumerate(files, start=1)],
        'statistics': stats,
        'fileName': report_file_name(repo_url)
    }
