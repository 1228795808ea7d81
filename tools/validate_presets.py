import os
import json
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from lipmakeup.presets import validate_preset

PRESETS_DIR = 'presets'


def validate_dir(presets_dir):
    errors = []

    for filename in sorted(os.listdir(presets_dir)):
        if not filename.endswith('.json'):
            continue

        path = os.path.join(presets_dir, filename)
        with open(path, 'r', encoding='utf-8') as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError:
                errors.append(f"{filename}: JSON Decode Error")
                continue

        errors.extend(f"{filename}: {e}" for e in validate_preset(data))

    return errors


def main():
    presets_dir = sys.argv[1] if len(sys.argv) > 1 else PRESETS_DIR
    errors = validate_dir(presets_dir)

    if errors:
        print("Found errors:")
        for e in errors:
            print(e)
        return 1

    print("All presets are valid.")
    return 0


if __name__ == '__main__':
    sys.exit(main())
