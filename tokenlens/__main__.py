"""Allow ``python -m tokenlens``."""

from tokenlens.tokenlens import main

if __name__ == '__main__':
    main()
