# file: Powerball.py
# -*- coding: utf-8 -*-
"""Entry page: `streamlit run Powerball.py`. The traffic dashboard lives in pages/Traffic.py."""
from __future__ import annotations

import drawdash

drawdash.main()
