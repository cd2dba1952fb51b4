"""File contents written into the scaffolded project."""

from typing import Final


DEFAULT_LAYOUT: Final[str] = """import React from 'react';

const Layout = ({ children }) => {
  return (
    <div>
      {/* Add your layout structure here */}
      {children}
    </div>
  );
};

export default Layout;
"""

ROUTER_LAYOUT: Final[str] = """import React from 'react';
import { Outlet } from 'react-router-dom';

const Layout = () => {
  return (
    <div>
      {/* Add your layout structure here */}
      <Outlet />
    </div>
  );
};

export default Layout;
"""

ROUTER_ENTRY: Final[str] = """import React from 'react';
import ReactDOM from 'react-dom/client';
import { BrowserRouter, Routes, Route } from 'react-router-dom';
import Layout from './Layout/Layout';
import App from './App';
import './%(stylesheet)s';

ReactDOM.createRoot(document.getElementById('root')).render(
  <React.StrictMode>
    <BrowserRouter>
      <Routes>
        <Route path="/" element={<Layout />}>
          <Route index element={<App />} />
        </Route>
      </Routes>
    </BrowserRouter>
  </React.StrictMode>
);
"""

def router_entry(stylesheet: str) -> str:
    return ROUTER_ENTRY % {"stylesheet": stylesheet}


TAILWIND_STYLESHEET: Final[str] = """@tailwind base;
@tailwind components;
@tailwind utilities;
"""

TAILWIND_CONFIG: Final[str] = """/** @type {import('tailwindcss').Config} */
export default {
  content: ['./index.html', './src/**/*.{js,ts,jsx,tsx}'],
  theme: {
    extend: {},
  },
  plugins: [],
};
"""
