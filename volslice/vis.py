import matplotlib.pyplot as plt
from matplotlib.widgets import Slider, RadioButtons
import matplotlib.gridspec as gridspec

from volslice.sampling import Plane, max_index, slice_shape
from volslice.render import SliceRenderer, TriPlanarSession
from volslice.transfer import TransferPreset

PRESET_LABELS = [p.label for p in TransferPreset]
PLANE_LABELS = [p.label for p in Plane]


class SliceViewer:
    def __init__(self, volume, plane=Plane.AXIAL, preset=TransferPreset.GRAYSCALE, show=True):
        self.renderer = SliceRenderer(volume)
        self.plane = Plane.parse(plane)
        self.preset = TransferPreset.parse(preset)
        self.max_index = max_index(volume.shape, self.plane)
        start = self.max_index // 2

        self.fig = plt.figure(figsize=(8, 7))
        gs = gridspec.GridSpec(2, 2, height_ratios=[1, 0.06], width_ratios=[1, 0.25])

        self.ax_img = self.fig.add_subplot(gs[0, 0])
        pixels = self.renderer.render(self.plane, start, self.preset)
        self.image = self.ax_img.imshow(pixels, origin='lower')
        self.ax_img.set_title(self.renderer.status_text())

        self.ax_slider = self.fig.add_subplot(gs[1, 0])
        self.slider = Slider(self.ax_slider, 'Slice', 0, self.max_index, valinit=start, valstep=1)
        self.slider.on_changed(self.on_slice_change)

        self.ax_preset = self.fig.add_subplot(gs[0, 1])
        self.ax_preset.set_title("Preset")
        self.rb_preset = RadioButtons(self.ax_preset, PRESET_LABELS,
                                      active=PRESET_LABELS.index(self.preset.label))
        self.rb_preset.on_clicked(self.on_preset_change)

        if show:
            plt.show()

    def refresh(self, index):
        pixels = self.renderer.render(self.plane, index, self.preset)
        self.image.set_data(pixels)
        self.ax_img.set_title(self.renderer.status_text())
        self.fig.canvas.draw_idle()
        print(self.renderer.status_text())

    def on_slice_change(self, val):
        self.refresh(int(val))

    def on_preset_change(self, label):
        self.preset = TransferPreset.parse(label)
        # Same slice, new preset
        self.refresh(self.renderer.index)


class TriPlanarViewer:
    def __init__(self, volume, preset=TransferPreset.GRAYSCALE, show=True):
        self.session = TriPlanarSession(volume, preset=preset)

        self.fig = plt.figure(figsize=(15, 6))
        gs = gridspec.GridSpec(2, 4, height_ratios=[1, 0.06], width_ratios=[1, 1, 1, 0.3])

        # Axial (X-Y), Coronal (X-Z), Sagittal (Y-Z)
        self.axes = {}
        self.images = {}
        self.crosshairs = {}
        buffers = self.session.render_all()
        for col, plane in enumerate(Plane):
            ax = self.fig.add_subplot(gs[0, col])
            self.axes[plane] = ax
            self.images[plane] = ax.imshow(buffers[plane], origin='lower')
            self.crosshairs[plane] = (ax.axvline(0, color='r', lw=0.8), ax.axhline(0, color='r', lw=0.8))
        self.update_overlays()

        self.ax_slider = self.fig.add_subplot(gs[1, 0:3])
        self.build_slider()

        side = gridspec.GridSpecFromSubplotSpec(2, 1, subplot_spec=gs[0, 3])
        self.ax_preset = self.fig.add_subplot(side[0])
        self.ax_preset.set_title("Preset")
        self.rb_preset = RadioButtons(self.ax_preset, PRESET_LABELS,
                                      active=PRESET_LABELS.index(self.session.preset.label))
        self.rb_preset.on_clicked(self.on_preset_change)

        self.ax_mode = self.fig.add_subplot(side[1])
        self.ax_mode.set_title("Slider drives")
        self.rb_mode = RadioButtons(self.ax_mode, PLANE_LABELS,
                                    active=PLANE_LABELS.index(self.session.active_plane.label))
        self.rb_mode.on_clicked(self.on_mode_change)

        if show:
            plt.show()

    def update_overlays(self):
        s = self.session
        titles = {
            Plane.AXIAL: f"Axial (Z={s.z})",
            Plane.CORONAL: f"Coronal (Y={s.y})",
            Plane.SAGITTAL: f"Sagittal (X={s.x})",
        }
        for plane, ax in self.axes.items():
            ax.set_title(titles[plane])
            out_w, out_h = slice_shape(s.volume.shape, plane)
            u, v = s.crosshair(plane)
            vline, hline = self.crosshairs[plane]
            vline.set_xdata([u * (out_w - 1)] * 2)
            hline.set_ydata([v * (out_h - 1)] * 2)
        self.fig.suptitle(s.status_text())

    def refresh(self, buffers):
        for plane, pixels in buffers.items():
            self.images[plane].set_data(pixels)
        self.update_overlays()
        self.fig.canvas.draw_idle()
        print(self.session.status_text())

    def on_slice_change(self, val):
        self.refresh(self.session.set_active_index(int(val)))

    def on_preset_change(self, label):
        self.refresh(self.session.set_preset(label))

    def build_slider(self):
        # Slider range is fixed at construction
        if getattr(self, 'slider', None) is not None:
            self.slider.disconnect_events()
        self.ax_slider.clear()
        self.slider = Slider(self.ax_slider, 'Slice', 0, self.session.active_max_index,
                             valinit=self.session.active_index, valstep=1)
        self.slider.on_changed(self.on_slice_change)

    def on_mode_change(self, label):
        self.session.set_active_plane(label)
        self.build_slider()
        self.fig.canvas.draw_idle()
