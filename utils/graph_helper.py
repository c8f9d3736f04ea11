from typing import List
import pyqtgraph as pg


def setup_wpm_plot(plot_widget: pg.PlotWidget):
    plot_widget.setBackground(None)
    plot_widget.showGrid(x=False, y=True, alpha=0.15)
    plot_widget.setMenuEnabled(False)
    plot_widget.setMouseEnabled(x=False, y=False)
    plot_widget.hideButtons()
    plot_widget.setLabel('left', 'WPM')
    plot_widget.setLabel('bottom', 'Time (s)')


def add_curve(plot_widget: pg.PlotWidget, x: List[float], y: List[float], color: str):
    return plot_widget.plot(x, y, pen=pg.mkPen(color, width=2.5), antialias=True)
