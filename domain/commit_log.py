def parse_commit_subjects(log_output: str) -> tuple[str, ...]:
    # One subject per "\n"-terminated line, newest first; other separators belong to the subject.
    subjects = [line.removesuffix("\r") for line in log_output.split("\n")]
    while subjects and not subjects[-1].strip():
        subjects.pop()
    return tuple(subjects)
