"""Basic QR code rendering examples."""

from qr2svg import QRCode, RenderCache, generate_qr

# Example 1: One call, several formats
# generate_qr() validates the options and renders everything requested
print("Example 1: generate_qr")
result = generate_qr("https://example.com", outputs=["svg", "png", "jpeg"])
with open("qr.svg", "w", encoding="utf-8") as f:
    f.write(result.svg)
with open("qr.png", "wb") as f:
    f.write(result.png)
print(f"✓ Rendered {result.width}x{result.height} SVG, PNG and JPEG")

# Example 2: Colors, margin and error correction
print("\nExample 2: Styled code")
result = generate_qr(
    "https://example.com",
    size=300,
    margin=10,
    background_color="#FFF8E7",
    foreground_color="#1A237E",
    error_correction="Q",
    outputs=["png"],
)
with open("styled.png", "wb") as f:
    f.write(result.png)
print("✓ Created styled.png")

# Example 3: Chainable builder with a logo
# High error correction leaves room for the covered modules
print("\nExample 3: QRCode builder")
qr = (
    QRCode("https://example.com")
    .set_size(400)
    .set_error_correction("H")
    .set_logo("logo.png", size_ratio=0.2)
)
qr.save("out/logo.svg")
qr.save("out/logo.jpg", quality=85)
qr.save("out/logo.webp")
print("✓ Created out/logo.svg, out/logo.jpg and out/logo.webp")

# Example 4: Reusing outputs
# The same cache instance must be passed to every QRCode that shares it
print("\nExample 4: Cached rendering")
cache = RenderCache(max_entries=32)
qr = QRCode("https://example.com", cache=cache)
first = qr.to_png()
second = qr.to_png()
print(f"✓ Second call served from cache: {first is second}")
