from __future__ import annotations

import copy
from typing import Any, Dict

_SAMPLE_CATALOGUE: Dict[str, Any] = {
    "File Operations": {
        "1.1 Text File Inspector & Reporter": {
            "description": "Python script using os and chardet",
            "steps": [
                "Read all .txt files from a specified directory.",
                "Automatically detect each file's encoding using chardet, defaulting to UTF-8 if detection fails or is uncertain.",
                "Print the first five lines of each file to the console.",
                "Skip empty files and log any unreadable files to an errors.log file.",
                "Generate a summary report in JSON format file_inspection_report.json containing for each file: filename, encoding_used, file_size_bytes, and lines_read.",
                "Provide a final console summary showing the total number of files processed and skipped.",
            ],
        },
        "1.2 Multi-Keyword File Searcher": {
            "description": "Python tool using argparse and csv",
            "steps": [
                "Accept multiple keywords from the user via command-line arguments.",
                "Search through all text files in a directory and its subdirectories for these keywords.",
                "For each match, record the filename, line_number, and a context snippet the matching line ±2 lines in search_results.csv.",
                "Skip files larger than 50 MB to maintain performance.",
                "Handle files that cannot be opened permission errors, corruption by logging them to a separate file.",
                "Generate a final summary showing the total number of matches found per keyword.",
            ],
        },
    },
    "PDF Tools": {
        "1.10 PDF Keyword Search & Reporter": {
            "description": "Python utility using pypdf2 or pdfplumber",
            "steps": [
                "Searches for a user-provided keyword across all pages of all PDFs in a directory.",
                "For each match, records the filename, page_number, and a text snippet surrounding the keyword.",
                "Saves all results to pdf_matches.json.",
                "Handles encrypted PDFs by skipping them and logging a warning.",
                "Generates a summary showing: files_scanned, pages_processed, total_matches_found.",
            ],
        },
    },
    "Text Analysis & Automation": {
        "1.17 Console Pattern Generator": {
            "description": "Python script using argparse",
            "steps": [
                "Generates text patterns, horizontal/vertical lines, squares, and pyramids from a user-provided character.",
                "Validates that the input is a single character.",
                "Allows the user to specify the pattern size width/height.",
                "Provides an output option to save the pattern to a text file.",
                "Displays the pattern in the console.",
                "Generates a summary log showing: pattern_type, size, output_file if used.",
            ],
        },
    },
}


def sample_catalogue_data() -> Dict[str, Any]:
    """Return a fresh copy of the built-in sample catalogue document."""

    return copy.deepcopy(_SAMPLE_CATALOGUE)
