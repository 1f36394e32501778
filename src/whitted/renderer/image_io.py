# renderer/image_io.py
import os
from PIL import Image
from whitted.renderer.framebuffer import FrameBuffer


def save_image(framebuffer: FrameBuffer, output_path: str, verbose: bool = True) -> str:
    """
    Write the frame buffer to disk. The format follows the file extension;
    `.ppm` gives the binary pixel dump.
    """
    directory = os.path.dirname(output_path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    image = Image.fromarray(framebuffer.pixels)
    image.save(output_path)
    if verbose:
        print(f"Image saved to {output_path}")
    return output_path
