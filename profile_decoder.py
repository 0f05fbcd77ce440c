#!/usr/bin/env python3
"""Profile TurboEntities to find performance bottlenecks."""

import cProfile
import io
import pstats

from turboentities import decode, encode, escape

# Sample text mixing every kind of reference
text = """
<p title="a=1&amp;b=2&copy=3">Caf&eacute; &amp; cr&egrave;me br&ucirc;l&eacute;e &copy 2024</p>
<p>&#x1D306; &#119558; &#128; &#xD800; &notit; &foo; &lt;&gt;&quot;&apos; &frac12;x &AMP</p>
<p>Plain text between the references, with a bare & here and there &amp there.</p>
""" * 200  # Repeat for more meaningful results

decoded = decode(text)

# Profile
pr = cProfile.Profile()
pr.enable()

for _ in range(10):
    decode(text)
    decode(text, is_attribute_value=True)
    encode(decoded, use_named_references=True)
    escape(decoded)

pr.disable()

# Print stats
s = io.StringIO()
ps = pstats.Stats(pr, stream=s).sort_stats("cumulative")
ps.print_stats(50)  # Top 50 functions
print(s.getvalue())
