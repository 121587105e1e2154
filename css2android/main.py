# css2android/main.py
import argparse
import os
import sys

from .translator.generator import convert


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="css2android",
        description=(
            "Convert a CSS stylesheet into Android resource XML.\n"
            "By default writes styles.xml from class/tag selectors; with --colors writes\n"
            "colors.xml from CSS custom properties (--name: value)."
        ),
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("input", help="Path to input CSS file (e.g. web/styles.css)")
    parser.add_argument("output", help="Output XML file path (e.g. app/src/main/res/values/styles.xml)")
    parser.add_argument("--colors", action="store_true", help="Generate colors.xml from custom properties")

    args = parser.parse_args(argv)
    mode = "colors" if args.colors else "styles"

    print(f"[CONFIG] input= {args.input}")
    print(f"[CONFIG] output= {args.output}")
    print(f"[CONFIG] mode= {mode}")

    if not os.path.isfile(args.input):
        print(f"[ERROR] Input CSS file '{args.input}' not found.")
        sys.exit(1)

    try:
        with open(args.input, "r", encoding="utf-8", errors="ignore") as f:
            css_text = f.read()
    except OSError as e:
        print(f"[ERROR] Failed to read CSS: {e}")
        sys.exit(1)

    print(f"[INFO] Generating Android {mode} XML -> {args.output}")
    output_xml = convert(css_text, mode=mode)

    try:
        out_dir = os.path.dirname(args.output)
        if out_dir:
            os.makedirs(out_dir, exist_ok=True)
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(output_xml)
    except OSError as e:
        print(f"[ERROR] Failed to write XML: {e}")
        sys.exit(2)

    print(f"[DONE] Android {mode} XML file generated: {args.output}")

if __name__ == "__main__":
    main()
