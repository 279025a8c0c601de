"""Rasterization examples - converting SVG to raster images."""

from qr2svg import QRCode, convert_svg_to_jpeg, convert_svg_to_png, svg_to_raster
from qr2svg.rasterizer import BackgroundMode, ResvgRasterizer
from qr2svg.resource_limits import ResourceLimits

svg_string = QRCode("https://example.com").to_svg()

# Example 1: Default size
# Without a target size the document is rendered at twice its native size
print("Example 1: Default rasterization")
with open("output.png", "wb") as f:
    f.write(convert_svg_to_png(svg_string))
print("✓ Created output.png")

# Example 2: Custom dimensions
# Width and height scale independently
print("\nExample 2: Custom dimensions")
with open("output_800x600.png", "wb") as f:
    f.write(convert_svg_to_png(svg_string, width=800, height=600))
print("✓ Created 800x600 image")

# Example 3: JPEG
# Transparent areas are flattened onto white; quality is clamped to 1..100
print("\nExample 3: JPEG output")
with open("output.jpg", "wb") as f:
    f.write(convert_svg_to_jpeg(svg_string, quality=80))
print("✓ Created output.jpg")

# Example 4: Any SVG file works, not only QR codes
print("\nExample 4: Rasterizing an SVG file")
with open("qr.svg", "w", encoding="utf-8") as f:
    f.write(svg_string)
with open("qr.svg", encoding="utf-8") as f:
    data = svg_to_raster(f.read(), width=256, height=256, format="webp")
with open("from_file.webp", "wb") as f:
    f.write(data)
print("✓ Rasterized from SVG file")

# Example 5: Pixel access with a custom rasterizer
print("\nExample 5: Pixel canvas")
rasterizer = ResvgRasterizer(limits=ResourceLimits(max_image_dimension=4096))
canvas = rasterizer.rasterize(
    svg_string, width=120, height=120, background_mode=BackgroundMode.OPAQUE_WHITE
)
print(f"✓ Canvas {canvas.width}x{canvas.height}, top-left pixel {canvas.getpixel(0, 0)}")
canvas.to_image().save("canvas.png")
