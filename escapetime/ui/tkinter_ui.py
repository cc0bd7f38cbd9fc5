import threading
import time
import tkinter as tk
from contextlib import contextmanager
from tkinter.filedialog import asksaveasfile
from typing import Optional, Tuple

from PIL import ImageTk

from escapetime.fractal.colouring import Palette
from escapetime.fractal.controller import RenderController
from escapetime.fractal.request import PixelBuffer, RenderRequest
from escapetime.ui.form import (
    SELECTION_NAMES,
    make_cli_args,
    make_request,
    parse_form,
    to_image,
    uses_parameter,
)
from escapetime.utils.errors import InvalidCutoff, InvalidViewport, RenderError
from escapetime.utils.fractal_utils import my_logger

MIN_IMAGE_WIDTH = 10
MIN_IMAGE_HEIGHT = 10
DEFAULT_PALETTE = "default"


@contextmanager
def temp_disable(parent):
    widgets_set = set_state_recursive(enumerate_leaves(parent), tk.NORMAL, tk.DISABLED)
    try:
        yield
    finally:
        set_state_recursive(widgets_set, tk.DISABLED, tk.NORMAL)


def enumerate_leaves(parent):
    if parent.winfo_class() in ('Frame', 'Labelframe'):
        out = []
        for child in parent.winfo_children():
            out += enumerate_leaves(child)
        return out
    return [parent]


def set_state_recursive(widgets, state_from, state_to):
    out = []
    for widget in widgets:
        states = widget.config().get('state')
        if states is None or state_from in states:
            widget.configure(state=state_to)
            out.append(widget)
    return out


class FractalUI(tk.Frame):
    def __init__(self, parent, request: RenderRequest, parallel: bool = True):
        tk.Frame.__init__(self, parent)
        self.parent = parent
        self.parent.title("Escape-time fractals")

        self.fractal = RenderController(parallel=parallel)
        self.compute_request = request
        self.viewport = request.viewport
        self.computing = False
        self.compute_result: Optional[PixelBuffer] = None

        ###########################################################################################

        self.control_panel = tk.Frame(self)
        self.control_panel.pack(side=tk.RIGHT, fill=tk.Y)

        compute_controls = tk.Frame(self.control_panel)
        view_controls = tk.LabelFrame(self.control_panel, text="View")
        image_controls = tk.LabelFrame(self.control_panel)
        navigation_controls = tk.LabelFrame(self.control_panel)

        panel_padding = 7
        compute_controls.pack(side=tk.TOP, fill=tk.X, pady=panel_padding)
        view_controls.pack(side=tk.TOP, fill=tk.X, pady=panel_padding)
        navigation_controls.pack(side=tk.BOTTOM, fill=tk.X, pady=panel_padding)
        image_controls.pack(side=tk.BOTTOM, fill=tk.X, pady=panel_padding)

        ###########################################################################################

        selection_frame = tk.LabelFrame(compute_controls, text="Fractal")
        self.selection = tk.StringVar(value=SELECTION_NAMES[request.variant])
        tk.OptionMenu(selection_frame, self.selection, *SELECTION_NAMES.values()).pack(fill=tk.X)

        self.parameter_frame = tk.LabelFrame(compute_controls, text="Parameter")
        self.real = tk.StringVar(value=str(request.real))
        self.imaginary = tk.StringVar(value=str(request.imaginary))
        real_row = tk.Frame(self.parameter_frame)
        imaginary_row = tk.Frame(self.parameter_frame)
        tk.Label(real_row, text="Re:").pack(side=tk.LEFT)
        tk.Label(imaginary_row, text="Im:").pack(side=tk.LEFT)
        real_entry = tk.Entry(real_row, textvariable=self.real)
        imaginary_entry = tk.Entry(imaginary_row, textvariable=self.imaginary)
        real_entry.pack(side=tk.LEFT, fill=tk.X)
        imaginary_entry.pack(side=tk.LEFT, fill=tk.X)
        real_row.pack(side=tk.TOP, fill=tk.X)
        imaginary_row.pack(side=tk.TOP, fill=tk.X)
        self.parameter_entries = [real_entry, imaginary_entry]
        self.selection.trace_add("write", lambda *_: self.write_parameter_state())
        self.write_parameter_state()

        self.iterations_frame = tk.LabelFrame(compute_controls, text="Max Iterations")
        self.max_iterations = tk.StringVar(value=str(request.max_iterations))
        self.iter_entry = tk.Entry(self.iterations_frame, textvariable=self.max_iterations, width=13)

        self.iter_entry.pack(fill=tk.X)
        for entry in [real_entry, imaginary_entry, self.iter_entry]:
            entry.bind("<Return>", lambda _: self.compute_and_draw())

        palette_frame = tk.LabelFrame(compute_controls, text="Palette")
        self.palette = tk.StringVar(value=request.palette.value if request.palette else DEFAULT_PALETTE)
        tk.OptionMenu(
            palette_frame, self.palette, DEFAULT_PALETTE, *(palette.value for palette in Palette)
        ).pack(fill=tk.X)

        other = tk.Frame(compute_controls)
        tk.Button(other, command=self.compute_and_draw, text="render").pack(side=tk.LEFT)
        tk.Button(other, command=self.copy_cli, text="copy CLI").pack(side=tk.RIGHT)

        self.time = tk.StringVar()
        tk.Label(compute_controls, textvariable=self.time).pack(side=tk.BOTTOM)
        other.pack(side=tk.BOTTOM, pady=5)

        selection_frame.pack(side=tk.TOP, fill=tk.X)
        self.parameter_frame.pack(side=tk.TOP, fill=tk.X)
        self.iterations_frame.pack(side=tk.TOP, fill=tk.X)
        palette_frame.pack(side=tk.TOP, fill=tk.X)

        ###########################################################################################

        center_frame = tk.LabelFrame(view_controls, text="Center")
        self.center_re = tk.StringVar()
        self.center_im = tk.StringVar()
        tk.Entry(center_frame, textvariable=self.center_re, state='readonly').pack(fill=tk.X)
        tk.Entry(center_frame, textvariable=self.center_im, state='readonly').pack(fill=tk.X)
        center_frame.pack(side=tk.TOP, fill=tk.X)

        self.zoom_frame = tk.LabelFrame(view_controls, text="Zoom")
        self.zoom = tk.StringVar()
        zoom_entry = tk.Entry(self.zoom_frame, textvariable=self.zoom)
        zoom_entry.bind("<Return>", lambda _: self.compute_and_draw())
        zoom_entry.pack(fill=tk.X)
        tk.Button(self.zoom_frame, text="+", command=self.increase_zoom).pack(side=tk.RIGHT)
        tk.Button(self.zoom_frame, text="-", command=self.decrease_zoom).pack(side=tk.RIGHT)
        self.zoom_frame.pack(side=tk.TOP, fill=tk.X)
        self.write_view_entries()

        ###########################################################################################

        tk.Button(image_controls, command=self.save_image, text="save").pack(side=tk.RIGHT)

        ###########################################################################################

        tk.Button(navigation_controls, command=self.back, text="prev").pack(side=tk.LEFT)
        tk.Button(navigation_controls, command=self.next, text="next").pack(side=tk.LEFT)
        tk.Button(navigation_controls, command=self.reset, text="reset").pack(side=tk.RIGHT)

        ###########################################################################################

        self.image_canvas = tk.Canvas(self, width=request.width, height=request.height)
        self.image_canvas.pack(side=tk.LEFT, expand=True, fill=tk.BOTH)
        self.image_canvas.bind("<ButtonPress-1>", self.on_button_press)
        self.image_canvas.bind("<B1-Motion>", self.on_move_press)
        self.image_canvas.bind("<ButtonRelease-1>", self.on_button_release)

        self.start_click = None
        self.rect = None
        self.canvas_image = None
        self.image = None

        ###########################################################################################

        self.pack(fill=tk.BOTH, expand=True)
        self.compute_and_draw()

    def copy_cli(self):
        self.parent.clipboard_clear()
        self.parent.clipboard_append(make_cli_args(self.compute_request))

    def write_parameter_state(self):
        # mandelbrot and burning ship ignore the constant
        state = tk.NORMAL if uses_parameter(self.selection.get()) else tk.DISABLED
        for entry in self.parameter_entries:
            entry.configure(state=state)

    def read_request(self):
        request = self.compute_request
        self.selection.set(SELECTION_NAMES[request.variant])
        self.real.set(str(request.real))
        self.imaginary.set(str(request.imaginary))
        self.max_iterations.set(str(request.max_iterations))
        self.palette.set(request.palette.value if request.palette else DEFAULT_PALETTE)
        self.viewport = request.viewport
        self.write_view_entries()

    def write_request(self) -> bool:
        values = parse_form(self.real.get(), self.imaginary.get(), self.max_iterations.get(), self.selection.get())
        palette = self.palette.get()
        if not self.set_zoom():
            return False
        request = make_request(
            values,
            *self.get_image_dimensions(),
            viewport=self.viewport,
            palette=None if palette == DEFAULT_PALETTE else Palette(palette),
        )
        try:
            request.validate()
        except RenderError as e:
            my_logger.warning(str(e))
            self.iterations_frame.config(fg="red" if isinstance(e, InvalidCutoff) else "black")
            self.zoom_frame.config(fg="red" if isinstance(e, InvalidViewport) else "black")
            return False
        self.iterations_frame.config(fg='black')
        self.compute_request = request
        return True

    def get_image_dimensions(self) -> Tuple[int, int]:
        width = self.image_canvas.winfo_width()
        height = self.image_canvas.winfo_height()
        if width <= MIN_IMAGE_WIDTH or height <= MIN_IMAGE_HEIGHT:
            return self.compute_request.width, self.compute_request.height
        return width, height

    def set_zoom(self):
        try:
            self.viewport = self.viewport.set_zoom(float(self.zoom.get()))
            self.zoom_frame.config(fg='black')
            return True
        except ValueError:
            self.zoom_frame.config(fg='red')
            return False

    def increase_zoom(self):
        self.viewport = self.viewport.set_zoom(2 * self.viewport.zoom)
        self.write_view_entries()
        self.compute_and_draw()

    def decrease_zoom(self):
        self.viewport = self.viewport.set_zoom(self.viewport.zoom / 2)
        self.write_view_entries()
        self.compute_and_draw()

    def write_view_entries(self):
        self.zoom.set(f"{self.viewport.zoom:.3e}")
        self.zoom_frame.config(fg='black')
        center = complex(self.viewport.center)
        self.center_re.set(str(center.real))
        self.center_im.set(str(center.imag))

    def reset(self):
        self.load(self.fractal.reset())

    def load(self, pop: Optional[Tuple[RenderRequest, PixelBuffer]]):
        if pop is None:
            return
        self.compute_request, self.compute_result = pop
        self.read_request()
        self.draw(self.compute_result)

    def back(self):
        self.load(self.fractal.back())

    def next(self):
        self.load(self.fractal.next())

    def on_button_press(self, event):
        if not self.computing:
            self.start_click = event

    def on_move_press(self, event):
        if self.start_click is None:
            return
        # expand rectangle as you drag the mouse, keeping the image's aspect ratio
        dw = abs(event.x - self.start_click.x)
        dh = round(dw * self.compute_request.height / self.compute_request.width)
        rect_coords = (
            self.start_click.x - dw,
            self.start_click.y - dh,
            self.start_click.x + dw,
            self.start_click.y + dh,
        )
        if self.rect is None:
            self.rect = self.image_canvas.create_rectangle(*rect_coords, fill="")
        else:
            self.image_canvas.coords(self.rect, *rect_coords)

    def on_button_release(self, _):
        if self.rect is None:
            return

        coords = self.image_canvas.coords(self.rect)
        self.image_canvas.delete(self.rect)
        self.rect = None

        new_pix_width = coords[2] - coords[0]
        click = self.start_click
        self.start_click = None
        if new_pix_width == 0:
            return

        canvas_width = self.image_canvas.winfo_width()
        canvas_height = self.image_canvas.winfo_height()
        center = self.viewport.get_point_by_coords(click.y, click.x, canvas_width, canvas_height)
        width_per_pix = self.viewport.get_width_per_pix(canvas_width)
        self.viewport = self.viewport.set_center(center).set_zoom_from_width(new_pix_width * width_per_pix)

        self.write_view_entries()
        self.compute_and_draw()

    def compute_and_draw(self):
        if self.computing:
            return
        threading.Thread(target=self.threaded_compute_and_draw).start()

    def threaded_compute_and_draw(self):
        with temp_disable(self.control_panel):
            self.computing = True
            my_logger.info("-" * 80)
            start = time.time()
            try:
                if not self.write_request():
                    return
                self.compute_result = self.fractal.compute(self.compute_request)
                self.draw(self.compute_result)
            finally:
                duration = time.time() - start
                self.time.set(f"{round(duration * 1000)} ms")
                my_logger.info("computation took {} seconds".format(round(duration, 2)))
                my_logger.info("-" * 80)
                self.computing = False

    def set_image(self, image):
        self.image = image
        tk_image = ImageTk.PhotoImage(image)
        if self.canvas_image is None:
            self.canvas_image = self.image_canvas.create_image(0, 0, image=tk_image, anchor=tk.NW)
        else:
            self.image_canvas.itemconfig(self.canvas_image, image=tk_image)
        self.image_canvas.image = tk_image

    def draw(self, buffer: PixelBuffer):
        self.set_image(to_image(buffer))

    def save_image(self):
        if self.image is None:
            return
        f = asksaveasfile(
            mode="wb",
            filetypes=[("PNG", "*.png")],
            initialfile=f"fractal-{time.strftime('%Y.%m.%d-%H.%M.%S')}",
            defaultextension=".png"
        )
        if f is not None:
            with f:
                self.image.save(f, "PNG")


def run(request: RenderRequest, parallel: bool = True):
    root = tk.Tk()
    FractalUI(parent=root, request=request, parallel=parallel)
    root.mainloop()
