#!/usr/bin/env python3
from customer_map.__main__ import main

if __name__ == "__main__":
    main()
