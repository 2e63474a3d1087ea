# scripts/process_resume.py
#!/usr/bin/env python3
"""
Extract a structured profile from a resume document, optionally analyze it

Usage:
    python scripts/process_resume.py --input resume.pdf
    python scripts/process_resume.py --input resume.docx --output profile.json
    python scripts/process_resume.py --input resume.pdf --analyze
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from resume.ai.ollama_client import OllamaClient
from resume.ai.retry import RetryPolicy
from resume.config import get_config
from resume.errors import ResumeError
from resume.insights import ExtractionEngine, AnalysisEngine
from resume.models import StoredResume
from resume.text_extractor import TextExtractor

logging.basicConfig(level=logging.INFO, format='%(levelname)s: %(message)s')
logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(description='Extract and analyze a resume')
    parser.add_argument('--input', required=True, help='Resume document (.pdf, .docx, .txt)')
    parser.add_argument('--output', help='Write the extracted profile to this JSON file')
    parser.add_argument('--analyze', action='store_true', help='Also score and critique the profile')
    parser.add_argument('--config', help='Pipeline YAML config (default: $RESUME_CONFIG)')

    args = parser.parse_args()

    config = get_config(args.config)
    ollama = OllamaClient(
        base_url=config.ollama_host,
        model=config.ollama_model,
        timeout=config.timeout
    )
    if not ollama.is_available():
        logger.error("Ollama is not available. Start it with: ollama serve")
        return 1

    retry_policy = RetryPolicy.from_config(config)
    input_path = Path(args.input)

    try:
        text = TextExtractor().extract_text(input_path)

        extractor = ExtractionEngine(
            ollama,
            temperature=config.extraction_temperature,
            max_tokens=config.max_tokens,
            max_resume_chars=config.max_resume_chars,
            retry_policy=retry_policy
        )
        profile = extractor.extract(text)
    except ResumeError as e:
        logger.error(f"Failed to process resume: {e}")
        return 1

    print(f"✓ Extracted profile: {profile['about'].get('name') or 'unknown'}")
    print(f"  Work entries: {len(profile['work'])}")
    print(f"  Education entries: {len(profile['education'])}")
    print(f"  Skills: {len(profile['skills'])}")

    if args.output:
        with open(args.output, 'w', encoding='utf-8') as f:
            json.dump(profile, f, indent=2, ensure_ascii=False)
        print(f"\n✓ Profile saved to: {args.output}")

    if args.analyze:
        analyzer = AnalysisEngine(
            ollama,
            temperature=config.analysis_temperature,
            retry_policy=retry_policy
        )
        resume = StoredResume(owner_id="cli", filename=input_path.name, json_content=profile)
        try:
            report = analyzer.analyze(resume)
        except ResumeError as e:
            logger.error(f"Analysis failed: {e}")
            return 1

        print("\n=== Analysis ===")
        print(f"Score: {report['score'] if report['score'] is not None else 'n/a'}")
        for section in ('missingSections', 'weaknesses', 'improvements', 'mistakes'):
            if report[section]:
                print(f"\n{section}:")
                for item in report[section]:
                    print(f"  - {item}")
        if report['overallFeedback']:
            print(f"\n{report['overallFeedback']}")

    return 0


if __name__ == '__main__':
    sys.exit(main())
