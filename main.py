"""
Entry script: `python main.py [--owner ...] [--repo ...] [--limit N]`.
The wiring lives in issue_report.cli; the installed command is `issue-report`.
"""

from issue_report.cli import main

if __name__ == "__main__":
    main()
